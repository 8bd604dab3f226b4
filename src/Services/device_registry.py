# src/Services/device_registry.py

"""
Device Registry Service

Validation and side effects around device CRUD:
- a device needs a non-blank name
- creating a device also creates its liveness flag
- liveness and login-activity overrides for admins

New devices start Down when they are pinged (the probe has to see them
first) and Up when ping is disabled, matching what the probe would write.
"""

from typing import List

from sqlalchemy.orm import Session

from src.Core import log_ws
from src.Core.errors import InvalidArgumentError, NotFoundError
from src.Models.device import Device
from src.Repositories import device as device_repo
from src.Repositories import device_status as status_repo
from src.Schemas.device import Device_create, Device_update


def initial_liveness(enable_ping: bool) -> bool:
    """Liveness flag written when a device is created."""
    return not enable_ping


def create_device(db: Session, payload: Device_create) -> Device:
    """
    Register a device.

    Raises:
        InvalidArgumentError: Missing or blank name
    """
    if not payload.name or not payload.name.strip():
        raise InvalidArgumentError("Name is required")

    fields = payload.model_dump()
    device = device_repo.create_device(db, fields, is_up=initial_liveness(fields["enable_ping"]))

    log_ws.log_from_thread(f"[REGISTRY] Device {device.id} ({device.name}) created")
    return device


def update_device(db: Session, device_id: int, payload: Device_update) -> Device:
    """
    Apply a partial update.

    Raises:
        NotFoundError: Unknown device id
        InvalidArgumentError: Name explicitly set to a blank value
    """
    changes = payload.changes()

    if "name" in changes and not changes["name"].strip():
        raise InvalidArgumentError("Name cannot be empty")

    device = device_repo.update_device(db, device_id, changes)
    if device is None:
        raise NotFoundError("Device not found")

    log_ws.log_from_thread(f"[REGISTRY] Device {device_id} updated: {sorted(changes)}")
    return device


def delete_device(db: Session, device_id: int) -> None:
    """
    Delete a device with its liveness flag and reservations.

    Raises:
        NotFoundError: Unknown device id
    """
    if not device_repo.delete_device(db, device_id):
        raise NotFoundError("Device not found")

    log_ws.log_from_thread(f"[REGISTRY] Device {device_id} deleted")


def list_devices(db: Session) -> List[Device]:
    return device_repo.get_all_devices(db)


def get_device(db: Session, device_id: int) -> Device:
    device = device_repo.get_device_by_id(db, device_id)
    if device is None:
        raise NotFoundError("Device not found")
    return device


def override_liveness(db: Session, device_id: int, is_up: bool, now: int) -> None:
    """Manually set the liveness flag (the probe overwrites it on its next cycle)."""
    get_device(db, device_id)
    status_repo.set_liveness(db, device_id, is_up, now)
    log_ws.log_from_thread(
        f"[REGISTRY] Device {device_id} liveness set to {'Up' if is_up else 'Down'} manually"
    )


def record_login_activity(db: Session, device_id: int, active: bool, now: int) -> None:
    get_device(db, device_id)
    status_repo.set_login_activity(db, device_id, active, now)
