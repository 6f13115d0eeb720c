from typing import Iterable, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from cloofy.core.constants import REPORT_TITLE
from cloofy.core.records import Ingredient, SalesTotals
from cloofy.services.dashboard_service import DashboardService


def _latin1(text: str) -> str:
    # Core PDF fonts only cover latin-1.
    return text.encode("latin-1", "replace").decode("latin-1")


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def render_monthly_report(
    totals: SalesTotals,
    low_stock: Iterable[Ingredient],
    *,
    month: Optional[str] = None,
    currency: str = "LKR",
    compress: bool = True,
) -> bytes:
    """Render the monthly summary PDF.

    Parameters
    ----------
    totals: revenue and tubs for the month (or all time)
    low_stock: ingredients at or below their reorder level
    month: ``YYYY-MM`` label, ``None`` for all time
    compress: deflate page streams; off leaves the text readable in the bytes

    Returns
    -------
    bytes: PDF content
    """
    pdf = FPDF()
    pdf.set_compression(compress)
    pdf.add_page()
    pdf.set_font("Helvetica", style="U", size=20)
    pdf.cell(0, 12, REPORT_TITLE, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)

    pdf.set_font("Helvetica", size=12)
    pdf.cell(0, 8, _latin1(f"Month: {month or 'All Time'}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(
        0,
        8,
        f"Total Revenue: {currency} {totals.revenue:.2f}",
        new_x=XPos.LMARGIN,
        new_y=YPos.NEXT,
    )
    pdf.cell(0, 8, f"Total Tubs Sold: {totals.tubs}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)

    pdf.set_font("Helvetica", style="U", size=12)
    pdf.cell(0, 8, "Low Stock Ingredients:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=12)
    lines = [
        f"- {item.name}: {_format_amount(item.current_stock)} {item.unit} "
        f"(reorder at {_format_amount(item.reorder_level)})"
        for item in low_stock
    ]
    for line in lines or ["- None"]:
        pdf.cell(0, 8, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    return bytes(pdf.output())


def build_monthly_report(
    dashboard: DashboardService, month: Optional[str] = None, *, currency: str = "LKR"
) -> bytes:
    month = (month or "").strip() or None
    totals = dashboard.monthly_totals(month)
    return render_monthly_report(totals, dashboard.low_stock(), month=month, currency=currency)


__all__ = ["build_monthly_report", "render_monthly_report"]
