import importlib

from cloofy.models.ingredient import IngredientRow
from cloofy.models.inventory_log import InventoryLogRow
from cloofy.models.product import ProductRow
from cloofy.models.sale import SaleRow


def import_all_models() -> None:
    for module_name in (
        "cloofy.models.ingredient",
        "cloofy.models.inventory_log",
        "cloofy.models.product",
        "cloofy.models.sale",
    ):
        importlib.import_module(module_name)


__all__ = [
    "IngredientRow",
    "InventoryLogRow",
    "ProductRow",
    "SaleRow",
    "import_all_models",
]
