from sqlalchemy import Column, Float, Integer, String

from cloofy.database.base import Base


class IngredientRow(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    unit = Column(String, nullable=False)

    current_stock = Column(Float, nullable=False)
    reorder_level = Column(Float, nullable=False)
    unit_cost = Column(Float, nullable=False)


__all__ = ["IngredientRow"]
