import logging
import math
from typing import Optional

from cloofy.core.constants import DEFAULT_ADJUST_REASON
from cloofy.core.dates import utcnow
from cloofy.core.errors import CloofyError, IngredientNotFound
from cloofy.core.records import Ingredient, InventoryLogEntry
from cloofy.storage.base import Storage

logger = logging.getLogger(__name__)


class InventoryLedger:
    """Single source of truth for ingredient stock and its audit trail.

    ``adjust`` never checks feasibility; callers that consume stock (the sale
    processor) must validate sufficiency inside the same storage transaction.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def add_ingredient(
        self,
        *,
        name: str,
        unit: str,
        current_stock: float = 0.0,
        reorder_level: float = 0.0,
        unit_cost: float = 0.0,
    ) -> Ingredient:
        name = (name or "").strip()
        unit = (unit or "").strip()
        if not name or not unit:
            raise CloofyError("Name and unit are required")
        with self.storage.transaction() as tx:
            ingredient = tx.add_ingredient(
                name=name,
                unit=unit,
                current_stock=float(current_stock),
                reorder_level=float(reorder_level),
                unit_cost=float(unit_cost),
            )
        logger.info("Created ingredient %s (%s)", ingredient.id, ingredient.name)
        return ingredient

    def get_ingredient(self, ingredient_id: int) -> Ingredient:
        with self.storage.transaction() as tx:
            ingredient = tx.get_ingredient(ingredient_id)
        if ingredient is None:
            raise IngredientNotFound(ingredient_id)
        return ingredient

    def list_ingredients(self) -> list[Ingredient]:
        with self.storage.transaction() as tx:
            return tx.list_ingredients()

    def adjust(self, ingredient_id: int, delta: float, reason: Optional[str] = None) -> float:
        delta = float(delta)
        if not math.isfinite(delta):
            raise CloofyError("change must be a finite number")
        reason = (reason or "").strip() or DEFAULT_ADJUST_REASON

        with self.storage.transaction() as tx:
            ingredient = tx.get_ingredient(ingredient_id)
            if ingredient is None:
                raise IngredientNotFound(ingredient_id)
            new_stock = ingredient.current_stock + delta
            tx.set_stock(ingredient_id, new_stock)
            tx.append_log(ingredient_id, delta, reason, utcnow())

        logger.info(
            "Stock of %s adjusted by %s to %s (%s)",
            ingredient.name,
            delta,
            new_stock,
            reason,
        )
        return new_stock

    def list_low_stock(self) -> list[Ingredient]:
        """Ingredients at or below their reorder level, ascending by id."""
        with self.storage.transaction() as tx:
            return tx.list_low_stock()

    def history(self, ingredient_id: Optional[int] = None) -> list[InventoryLogEntry]:
        with self.storage.transaction() as tx:
            if ingredient_id is not None and tx.get_ingredient(ingredient_id) is None:
                raise IngredientNotFound(ingredient_id)
            return tx.list_logs(ingredient_id)


__all__ = ["InventoryLedger"]
