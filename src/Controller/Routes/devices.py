# src/Controller/Routes/devices.py

"""
Device REST API

Endpoints:
- GET    /devices                 List every device with its derived state
- POST   /devices                 Register a device
- GET    /devices/{device_id}     Derived state of one device
- PUT    /devices/{device_id}     Partial update
- DELETE /devices/{device_id}     Delete device, liveness flag and reservations
- PUT    /devices/{device_id}/status   Manual liveness override

Derived state:
    availability ("Available" / "In Use" / "Not Available"), reservedBy and
    nextAvailableTime are computed at request time from the liveness flag and
    the reservation active "now". Clients poll GET /devices to stay current.

Errors:
    All failures are returned as {"error": "<message>"} with 400/404 status.

Usage:
    # In main.py
    from src.Controller.Routes import devices
    app.include_router(devices.router, prefix="/devices", tags=["devices"])
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from src.Controller.deps import get_DB, get_clock
from src.Core.time_utils import Clock
from src.Schemas import device as device_schema
from src.Services import availability
from src.Services import device_registry

router = APIRouter()


# ==========================================================
# 📌 List Devices with Derived State
# ==========================================================

@router.get("", response_model=List[device_schema.Device_view])
def list_devices(db: Session = Depends(get_DB), clock: Clock = Depends(get_clock)):
    """
    Get every device, in creation order, with its availability at request time.

    Returns:
        [
            {
                "id": 1,
                "name": "40-07",
                "deviceIp": "10.194.145.8",
                "telnet": "telnet 10.194.145.100 10033",
                "status": "Up",
                "reservedBy": "alice",
                "loginActivity": "No",
                "availability": "In Use",
                "nextAvailableTime": "1h 30m",
                "team": "QA",
                "section": "manual",
                "sectionGroup": "Manual",
                "owner": "",
                "location": "RACK11"
            },
            ...
        ]
    """
    return availability.list_device_views(db, clock.now_ms())


# ==========================================================
# 📌 Register New Device
# ==========================================================

@router.post("", response_model=device_schema.Device_created)
def create_device(device: device_schema.Device_create, db: Session = Depends(get_DB)):
    """
    Register a new device.

    Only `name` is required. Defaults: console_port 23, enable_ping true,
    team "Development", empty strings elsewhere.

    Example Request:
        POST /devices
        {"name": "40-4F", "device_ip": "10.194.145.23", "team": "QA", "section": "regression"}

    Returns:
        {"ok": true, "id": 7}

    Raises:
        400: Missing name
    """
    new_device = device_registry.create_device(db, device)
    return {"ok": True, "id": new_device.id}


# ==========================================================
# 📌 Get Specific Device
# ==========================================================

@router.get("/{device_id}", response_model=device_schema.Device_view)
def get_device(device_id: int, db: Session = Depends(get_DB), clock: Clock = Depends(get_clock)):
    """
    Derived state of one device.

    Raises:
        404: Device not found
    """
    return availability.get_device_view(db, device_id, clock.now_ms())


# ==========================================================
# 📌 Update Device
# ==========================================================

@router.put("/{device_id}", response_model=device_schema.Ok_response)
def update_device(
    device_id: int,
    device: device_schema.Device_update,
    db: Session = Depends(get_DB)
):
    """
    Update any subset of a device's fields.

    Omitted fields keep their value; empty strings clear a field;
    an empty console_port resets it to 23.

    Example Request:
        PUT /devices/3
        {"owner": "", "location": "RACK12"}

    Raises:
        400: Name set to an empty value
        404: Device not found
    """
    device_registry.update_device(db, device_id, device)
    return {"ok": True}


# ==========================================================
# 📌 Delete Device
# ==========================================================

@router.delete("/{device_id}", response_model=device_schema.Ok_response)
def delete_device(device_id: int, db: Session = Depends(get_DB)):
    """
    Delete a device together with its liveness flag and reservation history.

    Raises:
        404: Device not found
    """
    device_registry.delete_device(db, device_id)
    return {"ok": True}


# ==========================================================
# 📌 Manual Liveness Override
# ==========================================================

@router.put("/{device_id}/status", response_model=device_schema.Ok_response)
def set_device_status(
    device_id: int,
    status: device_schema.Device_status_update,
    db: Session = Depends(get_DB),
    clock: Clock = Depends(get_clock)
):
    """
    Force the liveness flag of a device, e.g. while the probe is disabled.

    The next probe cycle overwrites the value.

    Raises:
        404: Device not found
    """
    device_registry.override_liveness(db, device_id, status.is_up, clock.now_ms())
    return {"ok": True}
