from pathlib import Path


APP_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = APP_DIR.parent

TEMPLATES_DIR = APP_DIR / "templates"

DEFAULT_ADJUST_REASON = "Manual adjust"
SALE_REASON_TEMPLATE = "Sale of {product_name}"

REPORT_TITLE = "CLOOFY Monthly Report"
REPORT_FILENAME = "cloofy-monthly-report.pdf"

# Upper bound on tubs in a single sale; keeps totals finite and within SQLite INTEGER.
MAX_SALE_QUANTITY = 1_000_000
