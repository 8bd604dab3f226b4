# src/Models/inventory.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import declared_attr
from src.DB.base_class import Base


class InventoryItem(Base):
    """Spare hardware stock: how many units of a device model are on the shelf."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)

    device_name = Column(
        String(200),
        nullable=False,
        unique=True,
        doc="Hardware model name, e.g. '40-03_EM'"
    )

    count = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("count >= 0", name='check_inventory_count'),
    )

    def __repr__(self) -> str:
        return f"<InventoryItem(device_name={self.device_name!r}, count={self.count!r})>"
