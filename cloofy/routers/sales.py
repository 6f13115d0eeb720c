from typing import List

from fastapi import APIRouter, Depends

from cloofy.core.coercion import parse_quantity
from cloofy.dependencies import get_sale_processor
from cloofy.schemas.sale import SaleCreate, SaleRead
from cloofy.services.sale_processor import SaleProcessor

router = APIRouter(prefix="/api/sales", tags=["Sales"])


@router.post("")
def record_sale(payload: SaleCreate, processor: SaleProcessor = Depends(get_sale_processor)):
    qty = parse_quantity(payload.qty)
    receipt = processor.record_sale(payload.product_id, qty)
    return {"success": True, "totalPrice": receipt.total_price}


@router.get("", response_model=List[SaleRead])
def list_sales(processor: SaleProcessor = Depends(get_sale_processor)):
    return list(reversed(processor.list_sales()))


__all__ = ["router"]
