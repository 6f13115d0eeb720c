"""Sale workflow: check every recipe ingredient, then deduct and record.

A sale either consumes its whole recipe or nothing.  The feasibility pass
and the commit pass run in one storage transaction, so no other sale or
manual adjustment can change stock between them.
"""
import logging
import math
from typing import Iterable, Optional

from cloofy.core.constants import MAX_SALE_QUANTITY, SALE_REASON_TEMPLATE
from cloofy.core.dates import utcnow
from cloofy.core.errors import (
    IngredientMissing,
    InsufficientStock,
    InvalidQuantity,
    InvalidRecipe,
    ProductNotFound,
)
from cloofy.core.records import Product, RecipeLine, Sale, SaleReceipt
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.storage.base import Storage, StorageSession

logger = logging.getLogger(__name__)


def _require_quantity(qty) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
        raise InvalidQuantity(qty)
    if qty > MAX_SALE_QUANTITY:
        raise InvalidQuantity(qty, f"Quantity cannot exceed {MAX_SALE_QUANTITY}")
    return qty


def _check_feasibility(tx: StorageSession, recipe: Iterable[RecipeLine], qty: int) -> None:
    # Lines naming the same ingredient draw from one stock level, so the
    # running total per ingredient is what gets compared.
    committed: dict[int, float] = {}
    for line in recipe:
        ingredient = tx.get_ingredient(line.ingredient_id)
        if ingredient is None:
            raise IngredientMissing(line.ingredient_id)
        required = line.quantity_per_unit * qty
        total_required = committed.get(ingredient.id, 0.0) + required
        if ingredient.current_stock < total_required:
            raise InsufficientStock(ingredient.name, total_required, ingredient.current_stock)
        committed[ingredient.id] = total_required


class SaleProcessor:
    def __init__(self, storage: Storage, ledger: Optional[InventoryLedger] = None):
        self.storage = storage
        self.ledger = ledger or InventoryLedger(storage)

    def add_product(self, *, name: str, price: float, recipe: Iterable[RecipeLine]) -> Product:
        name = (name or "").strip()
        if not name:
            raise InvalidRecipe("Product name is required")
        price = float(price)
        if not math.isfinite(price) or price < 0:
            raise InvalidRecipe("price must be a non-negative number")

        lines = tuple(recipe)
        for line in lines:
            if not math.isfinite(line.quantity_per_unit) or line.quantity_per_unit <= 0:
                raise InvalidRecipe(
                    f"Recipe quantity for ingredient {line.ingredient_id} must be positive"
                )

        with self.storage.transaction() as tx:
            for line in lines:
                if tx.get_ingredient(line.ingredient_id) is None:
                    raise IngredientMissing(line.ingredient_id)
            product = tx.add_product(name=name, price=price, recipe=lines)

        logger.info("Created product %s (%s) with %d recipe line(s)", product.id, product.name, len(lines))
        return product

    def get_product(self, product_id: int) -> Product:
        with self.storage.transaction() as tx:
            product = tx.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def list_products(self) -> list[Product]:
        with self.storage.transaction() as tx:
            return tx.list_products()

    def list_sales(self) -> list[Sale]:
        with self.storage.transaction() as tx:
            return tx.list_sales()

    def record_sale(self, product_id: int, qty: int) -> SaleReceipt:
        with self.storage.transaction() as tx:
            product = tx.get_product(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            qty = _require_quantity(qty)

            try:
                _check_feasibility(tx, product.recipe, qty)
            except (IngredientMissing, InsufficientStock) as exc:
                logger.info("Sale of %s x%d rejected: %s", product.name, qty, exc.message)
                raise

            reason = SALE_REASON_TEMPLATE.format(product_name=product.name)
            for line in product.recipe:
                self.ledger.adjust(line.ingredient_id, -(line.quantity_per_unit * qty), reason)

            total_price = product.price * qty
            sale = tx.add_sale(product.id, qty, total_price, utcnow())

        logger.info("Recorded sale %s: %s x%d = %.2f", sale.id, product.name, qty, total_price)
        return SaleReceipt(sale=sale, total_price=total_price)


__all__ = ["SaleProcessor"]
