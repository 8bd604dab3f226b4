# src/Schemas/inventory.py

from pydantic import BaseModel, ConfigDict, Field


class Inventory_get(BaseModel):
    """Spare hardware counter as returned by GET /inventory."""
    model_config = ConfigDict(from_attributes=True)

    device_name: str
    count: int


class Inventory_update(BaseModel):
    """Payload of PUT /inventory/{device_name}."""
    count: int = Field(..., ge=0, description="Units on the shelf")
