import logging

from cloofy.core.records import RecipeLine
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.services.sale_processor import SaleProcessor
from cloofy.storage.base import Storage

logger = logging.getLogger(__name__)

# Weights are in grams; unit_cost is per gram.
DEFAULT_INGREDIENTS = (
    {"key": "cotton_candy", "name": "Cotton Candy Base", "current_stock": 12000, "reorder_level": 4000, "unit_cost": 3},
    {"key": "choc_syrup", "name": "Hershey's Chocolate Syrup", "current_stock": 6000, "reorder_level": 2000, "unit_cost": 3.82},
    {"key": "choc_chips", "name": "Dark Chocolate Chips", "current_stock": 2000, "reorder_level": 500, "unit_cost": 1.85},
    {"key": "straw_syrup", "name": "Hershey's Strawberry Syrup", "current_stock": 6000, "reorder_level": 2000, "unit_cost": 4.41},
    {"key": "straw_pebbles", "name": "Strawberry Pebbles", "current_stock": 2000, "reorder_level": 500, "unit_cost": 2},
    {"key": "caramel_syrup", "name": "Caramel Syrup", "current_stock": 6000, "reorder_level": 2000, "unit_cost": 5},
    {"key": "biscoff", "name": "Biscoff Crumbs", "current_stock": 1750, "reorder_level": 500, "unit_cost": 5},
)

DEFAULT_PRODUCTS = (
    {
        "name": "Chocolate Drizzle Cloud",
        "price": 300,
        "recipe": (("cotton_candy", 20), ("choc_syrup", 10), ("choc_chips", 2)),
    },
    {
        "name": "Strawberry Drizzle Cloud",
        "price": 300,
        "recipe": (("cotton_candy", 20), ("straw_syrup", 10), ("straw_pebbles", 2)),
    },
    {
        "name": "Caramel Drizzle Cloud",
        "price": 300,
        "recipe": (("cotton_candy", 20), ("caramel_syrup", 10), ("biscoff", 2)),
    },
)


def seed_defaults(storage: Storage, *, force: bool = False) -> bool:
    """Load the starter menu. Skipped when ingredients already exist unless forced."""
    ledger = InventoryLedger(storage)
    processor = SaleProcessor(storage, ledger)

    with storage.transaction():
        if ledger.list_ingredients() and not force:
            logger.info("Seed skipped: ingredients already exist.")
            return False

        logger.info("Seeding initial CLOOFY ingredients & products...")
        ids = {}
        for item in DEFAULT_INGREDIENTS:
            ingredient = ledger.add_ingredient(
                name=item["name"],
                unit="g",
                current_stock=item["current_stock"],
                reorder_level=item["reorder_level"],
                unit_cost=item["unit_cost"],
            )
            ids[item["key"]] = ingredient.id

        for item in DEFAULT_PRODUCTS:
            processor.add_product(
                name=item["name"],
                price=item["price"],
                recipe=[RecipeLine(ids[key], float(qty)) for key, qty in item["recipe"]],
            )

    logger.info("Seeding completed.")
    return True


__all__ = ["DEFAULT_INGREDIENTS", "DEFAULT_PRODUCTS", "seed_defaults"]
