# src/Services/reservation_ledger.py

"""
Reservation Ledger

Reserve and release operations on devices, enforcing that at most one
reservation is active on a device at any instant.

Concurrency:
    Each operation is a read-modify-write (check for an active reservation,
    then insert or truncate). Two layers serialize it per device:
    - a process-wide lock picked from a fixed pool by device id, for the
      threadpool that runs FastAPI's synchronous endpoints
    - SELECT ... FOR UPDATE on the device row inside the same transaction,
      for several worker processes sharing one PostgreSQL database
    Any failure rolls the transaction back; callers never observe a partial
    write.

Release model:
    Releasing truncates the active reservation (end_time = release instant).
    The row stays in the table as history.
"""

import threading
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from src.Core import log_ws
from src.Core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from src.Core.time_utils import MAX_EPOCH_MS, duration_to_ms
from src.Models.reservation import Reservation
from src.Repositories import device as device_repo
from src.Repositories import reservation as reservation_repo
from src.Services.availability import effective_liveness


class DeviceLocks:
    """
    Fixed pool of threading.Locks shared out by device id.

    The pool never grows, whatever ids callers send. Two devices may share a
    lock; that only serializes them a little more than needed.
    """

    def __init__(self, size: int = 64):
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(size)]

    def __len__(self) -> int:
        return len(self._locks)

    def for_device(self, device_id: int) -> threading.Lock:
        return self._locks[device_id % len(self._locks)]


device_locks = DeviceLocks()


def get_active_reservation(db: Session, device_id: int, at: int) -> Optional[Reservation]:
    """Reservation active on the device at `at` (latest end_time wins on overlap)."""
    return reservation_repo.get_active_reservation(db, device_id, at)


def reserve(
    db: Session,
    device_id: int,
    user_name: Optional[str],
    now: int,
    days: Any = 0,
    hours: Any = 0,
    minutes: Any = 0
) -> Reservation:
    """
    Reserve a device from `now` for the given duration.

    Checks, in order:
        1. device exists                               else NotFoundError
        2. device is effectively up                    else InvalidStateError
        3. no reservation active at `now`              else ConflictError
        4. duration is positive and ends within range  else InvalidArgumentError
        5. user name is not blank                      else InvalidArgumentError

    Args:
        db: SQLAlchemy session
        device_id: Device to reserve
        user_name: Free-text claimant
        now: Current instant in epoch milliseconds
        days, hours, minutes: Duration components (missing = 0)

    Returns:
        The committed Reservation
    """
    with device_locks.for_device(device_id):
        try:
            device = device_repo.lock_device(db, device_id)
            if device is None:
                raise NotFoundError("Device not found")

            if not effective_liveness(device, device.status):
                raise InvalidStateError("Device is Down")

            if reservation_repo.get_active_reservation(db, device_id, now) is not None:
                raise ConflictError("Device already reserved")

            try:
                duration_ms = duration_to_ms(days, hours, minutes)
            except (TypeError, ValueError, OverflowError):
                raise InvalidArgumentError("Duration must be numeric")
            if duration_ms <= 0:
                raise InvalidArgumentError("Duration cannot be zero")
            if now + duration_ms > MAX_EPOCH_MS:
                raise InvalidArgumentError("Duration is too long")

            if not user_name or not user_name.strip():
                raise InvalidArgumentError("User name is required")

            reservation = reservation_repo.add_reservation(
                db, device_id, user_name, now, now + duration_ms
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

    log_ws.log_from_thread(
        f"[LEDGER] Device {device_id} reserved by {user_name} "
        f"from {reservation.start_time} until {reservation.end_time}"
    )
    return reservation


def release(db: Session, device_id: int, user_name: Optional[str], at: int) -> Reservation:
    """
    Release the reservation active on a device at `at`.

    Only the user who made the reservation may release it (case-sensitive
    comparison). The reservation's end_time becomes `at`, which makes the
    device available immediately.

    Raises:
        InvalidStateError: No reservation active at `at`
        ForbiddenError: `user_name` differs from the reserver
    """
    with device_locks.for_device(device_id):
        try:
            device_repo.lock_device(db, device_id)

            active = reservation_repo.get_active_reservation(db, device_id, at)
            if active is None:
                raise InvalidStateError("No active reservation")

            if active.user_name != user_name:
                raise ForbiddenError("Only the person who reserved can release")

            reservation_repo.truncate_reservation(db, active, at)
            db.commit()
        except Exception:
            db.rollback()
            raise

    log_ws.log_from_thread(f"[LEDGER] Device {device_id} released by {user_name} at {at}")
    return active
