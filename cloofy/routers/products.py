from typing import List

from fastapi import APIRouter, Depends

from cloofy.dependencies import get_sale_processor
from cloofy.schemas.product import ProductCreate, ProductRead
from cloofy.services.sale_processor import SaleProcessor

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductRead])
def list_products(processor: SaleProcessor = Depends(get_sale_processor)):
    return [ProductRead.from_record(product) for product in processor.list_products()]


@router.post("")
def create_product(payload: ProductCreate, processor: SaleProcessor = Depends(get_sale_processor)):
    product = processor.add_product(
        name=payload.name,
        price=payload.price,
        recipe=[line.to_record() for line in payload.recipe],
    )
    return {"id": product.id}


__all__ = ["router"]
