# src/Controller/Routes/inventory.py

"""
Inventory REST API

Spare hardware counters, independent from reservations.

Endpoints:
- GET /inventory                 List counters by device name
- PUT /inventory/{device_name}   Set (or create) the counter of a device model
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from src.Controller.deps import get_DB
from src.Core import log_ws
from src.Repositories import inventory as inventory_repo
from src.Schemas import device as device_schema
from src.Schemas import inventory as inventory_schema

router = APIRouter()


@router.get("", response_model=List[inventory_schema.Inventory_get])
def list_inventory(db: Session = Depends(get_DB)):
    """
    Returns:
        [{"device_name": "40-03", "count": 2}, ...]
    """
    return inventory_repo.get_inventory(db)


@router.put("/{device_name}", response_model=device_schema.Ok_response)
def set_inventory_count(
    device_name: str,
    item: inventory_schema.Inventory_update,
    db: Session = Depends(get_DB)
):
    """
    Set the number of spare units of a device model.

    Raises:
        400: Negative or non-integer count
    """
    inventory_repo.upsert_inventory_item(db, device_name, item.count)
    log_ws.log_from_thread(f"[INVENTORY] {device_name} count set to {item.count}")
    return {"ok": True}
