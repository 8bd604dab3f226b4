# src/Repositories/device_status.py

"""
Liveness Flag Repository

Writes to device_status. Only the liveness probe and the manual override
endpoints call these functions; the reservation ledger never does.
"""

from sqlalchemy.orm import Session
from src.Models.device_status import DeviceStatus
from typing import Optional


def get_status(db: Session, device_id: int) -> Optional[DeviceStatus]:
    """Liveness flag of a device, or None when the device has no row."""
    return db.query(DeviceStatus).filter(DeviceStatus.device_id == device_id).first()


def _get_or_create(db: Session, device_id: int) -> DeviceStatus:
    status = get_status(db, device_id)
    if status is None:
        status = DeviceStatus(device_id=device_id, is_up=False, last_checked=0, login_activity=False)
        db.add(status)
    return status


def set_liveness(db: Session, device_id: int, is_up: bool, checked_at: int) -> DeviceStatus:
    """
    Record a liveness result for a device.

    Args:
        db: SQLAlchemy session
        device_id: Device id (must exist)
        is_up: Probe or override result
        checked_at: Epoch milliseconds of the check

    Returns:
        Updated DeviceStatus
    """
    status = _get_or_create(db, device_id)
    status.is_up = is_up
    status.last_checked = checked_at
    db.commit()
    return status


def set_login_activity(db: Session, device_id: int, active: bool, checked_at: int) -> DeviceStatus:
    """Record whether someone is logged in on the device console."""
    status = _get_or_create(db, device_id)
    status.login_activity = active
    status.last_checked = checked_at
    db.commit()
    return status
