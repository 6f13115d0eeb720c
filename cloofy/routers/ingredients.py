from typing import List

from fastapi import APIRouter, Depends

from cloofy.dependencies import get_ledger
from cloofy.schemas.ingredient import (
    IngredientCreate,
    IngredientRead,
    InventoryLogRead,
    StockAdjustment,
)
from cloofy.services.inventory_ledger import InventoryLedger

router = APIRouter(prefix="/api/ingredients", tags=["Ingredients"])


@router.get("", response_model=List[IngredientRead])
def list_ingredients(ledger: InventoryLedger = Depends(get_ledger)):
    return ledger.list_ingredients()


@router.post("")
def create_ingredient(payload: IngredientCreate, ledger: InventoryLedger = Depends(get_ledger)):
    ingredient = ledger.add_ingredient(
        name=payload.name,
        unit=payload.unit,
        current_stock=payload.current_stock,
        reorder_level=payload.reorder_level,
        unit_cost=payload.unit_cost,
    )
    return {"id": ingredient.id}


@router.post("/{ingredient_id}/adjust")
def adjust_stock(
    ingredient_id: int,
    payload: StockAdjustment,
    ledger: InventoryLedger = Depends(get_ledger),
):
    new_stock = ledger.adjust(ingredient_id, payload.change, payload.reason)
    return {"success": True, "newStock": new_stock}


@router.get("/{ingredient_id}/logs", response_model=List[InventoryLogRead])
def ingredient_logs(ingredient_id: int, ledger: InventoryLedger = Depends(get_ledger)):
    return ledger.history(ingredient_id)


__all__ = ["router"]
