# src/Repositories/device.py

"""
Device Repository Module

Database access functions for the Device model and its liveness flag.

Responsibilities:
- CRUD operations for devices
- Creating the liveness flag together with its device
- Row locking used to serialize reservation writes per device

Usage:
    from src.Repositories import device as device_repo
    from src.DB.session import SessionLocal

    db = SessionLocal()
    all_devices = device_repo.get_all_devices(db)

Design Pattern:
    Repository Pattern: query code lives here, business rules live in
    src/Services, HTTP concerns live in src/Controller.
"""

from sqlalchemy.orm import Session, selectinload
from src.Models.device import Device
from src.Models.device_status import DeviceStatus
from typing import Any, Dict, List, Optional


# ==========================================================
# 📌 READ OPERATIONS
# ==========================================================

def get_all_devices(db: Session) -> List[Device]:
    """
    Get all devices in creation order (ascending id).

    The liveness flag is loaded eagerly since every listing needs it.

    Args:
        db: SQLAlchemy session

    Returns:
        List of Device objects
    """
    return (
        db.query(Device)
        .options(selectinload(Device.status))
        .order_by(Device.id.asc())
        .all()
    )


def get_device_by_id(db: Session, device_id: int) -> Optional[Device]:
    """
    Get a specific device by its id.

    Returns:
        Device object or None if not found
    """
    return db.query(Device).filter(Device.id == device_id).first()


def lock_device(db: Session, device_id: int) -> Optional[Device]:
    """
    Load a device with a row lock held until the transaction ends.

    On PostgreSQL this is SELECT ... FOR UPDATE, which serializes concurrent
    reserve/release transactions on the same device across processes.
    Dialects without row locks (SQLite) ignore the clause.

    Returns:
        Device object or None if not found
    """
    return (
        db.query(Device)
        .filter(Device.id == device_id)
        .with_for_update()
        .first()
    )


def count_devices(db: Session) -> int:
    """Number of registered devices."""
    return db.query(Device).count()


# ==========================================================
# 📌 WRITE OPERATIONS
# ==========================================================

def create_device(db: Session, fields: Dict[str, Any], is_up: bool) -> Device:
    """
    Create a device and its liveness flag in one transaction.

    Args:
        db: SQLAlchemy session
        fields: Column values for the device
        is_up: Initial value of the liveness flag

    Returns:
        Created Device object

    Example:
        device = create_device(db, {"name": "40-03", "enable_ping": False}, is_up=True)
    """
    new_device = Device(**fields)
    new_device.status = DeviceStatus(is_up=is_up, last_checked=0, login_activity=False)

    db.add(new_device)
    db.commit()
    db.refresh(new_device)
    return new_device


def update_device(db: Session, device_id: int, changes: Dict[str, Any]) -> Optional[Device]:
    """
    Apply a set of column changes to an existing device.

    Args:
        db: SQLAlchemy session
        device_id: Id of the device to update
        changes: Column values to overwrite (absent keys are left untouched)

    Returns:
        Updated Device object or None if not found
    """
    db_device = get_device_by_id(db, device_id)

    if not db_device:
        return None

    for key, value in changes.items():
        if hasattr(db_device, key):
            setattr(db_device, key, value)

    db.commit()
    db.refresh(db_device)
    return db_device


def delete_device(db: Session, device_id: int) -> bool:
    """
    Delete a device (hard delete).

    The liveness flag and every reservation of the device are removed with
    it (ORM cascade plus ON DELETE CASCADE).

    Returns:
        True if deleted, False if not found
    """
    db_device = get_device_by_id(db, device_id)

    if not db_device:
        return False

    db.delete(db_device)
    db.commit()
    return True
