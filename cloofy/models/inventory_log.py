from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String

from cloofy.database.base import Base


class InventoryLogRow(Base):
    __tablename__ = "inventory_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)

    change = Column(Float, nullable=False)
    reason = Column(String, nullable=False, default="")

    __table_args__ = (
        Index("idx_inventory_logs_ingredient", "ingredient_id"),
    )


__all__ = ["InventoryLogRow"]
