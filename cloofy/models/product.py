from sqlalchemy import JSON, Column, Float, Integer, String

from cloofy.database.base import Base


class ProductRow(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)

    # Ordered list of {"ingredient_id": int, "quantity_per_unit": float}.
    recipe = Column(JSON, nullable=False, default=list)


__all__ = ["ProductRow"]
