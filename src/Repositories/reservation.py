# src/Repositories/reservation.py

"""
Reservation Repository Module

Query and write helpers for the reservations table.

The write helpers only flush: the reservation ledger owns the transaction
and commits once its checks and the write have all succeeded.

A reservation is active at instant T when start_time <= T < end_time.
"""

from sqlalchemy.orm import Session
from src.Models.reservation import Reservation
from typing import Dict, List, Optional


def get_active_reservation(db: Session, device_id: int, at: int) -> Optional[Reservation]:
    """
    Get the reservation active on a device at a given instant.

    If several rows overlap the instant (only possible after concurrent
    writes that bypassed the ledger), the one ending last wins.

    Args:
        db: SQLAlchemy session
        device_id: Device id
        at: Instant in epoch milliseconds

    Returns:
        Reservation object or None
    """
    return (
        db.query(Reservation)
        .filter(
            Reservation.device_id == device_id,
            Reservation.start_time <= at,
            Reservation.end_time > at,
        )
        .order_by(Reservation.end_time.desc(), Reservation.id.desc())
        .first()
    )


def get_active_reservations(db: Session, at: int) -> Dict[int, Reservation]:
    """
    Map device id -> reservation active at `at`, for all devices at once.

    Applies the same "latest end_time wins" rule as get_active_reservation().
    """
    rows = (
        db.query(Reservation)
        .filter(Reservation.start_time <= at, Reservation.end_time > at)
        .order_by(Reservation.end_time.asc(), Reservation.id.asc())
        .all()
    )

    # Ascending order: later rows overwrite earlier ones
    active: Dict[int, Reservation] = {}
    for row in rows:
        active[row.device_id] = row
    return active


def get_reservations_for_device(db: Session, device_id: int) -> List[Reservation]:
    """Full reservation history of a device, oldest first."""
    return (
        db.query(Reservation)
        .filter(Reservation.device_id == device_id)
        .order_by(Reservation.start_time.asc(), Reservation.id.asc())
        .all()
    )


def add_reservation(
    db: Session,
    device_id: int,
    user_name: str,
    start_time: int,
    end_time: int
) -> Reservation:
    """Stage a new reservation row (flushed, not committed)."""
    reservation = Reservation(
        device_id=device_id,
        user_name=user_name,
        start_time=start_time,
        end_time=end_time,
    )
    db.add(reservation)
    db.flush()
    return reservation


def truncate_reservation(db: Session, reservation: Reservation, at: int) -> Reservation:
    """Stage an early release: the reservation now ends at `at` (flushed, not committed)."""
    reservation.end_time = at
    db.flush()
    return reservation
