# src/Repositories/inventory.py

from sqlalchemy.orm import Session
from src.Models.inventory import InventoryItem
from typing import List


def get_inventory(db: Session) -> List[InventoryItem]:
    """All stock counters, alphabetically by device name."""
    return db.query(InventoryItem).order_by(InventoryItem.device_name.asc()).all()


def upsert_inventory_item(db: Session, device_name: str, count: int) -> InventoryItem:
    """
    Set the stock count of a device model, creating the counter if needed.

    Args:
        db: SQLAlchemy session
        device_name: Hardware model name
        count: Units on the shelf (>= 0)

    Returns:
        Created or updated InventoryItem
    """
    item = db.query(InventoryItem).filter(InventoryItem.device_name == device_name).first()

    if item is None:
        item = InventoryItem(device_name=device_name, count=count)
        db.add(item)
    else:
        item.count = count

    db.commit()
    db.refresh(item)
    return item
