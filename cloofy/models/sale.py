from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer

from cloofy.database.base import Base


class SaleRow(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    qty = Column(Integer, nullable=False)
    total_price = Column(Float, nullable=False)

    __table_args__ = (
        Index("idx_sales_timestamp", "timestamp"),
    )


__all__ = ["SaleRow"]
