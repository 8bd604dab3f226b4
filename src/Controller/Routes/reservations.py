# src/Controller/Routes/reservations.py

"""
Reservation REST API

Endpoints:
- POST /reserve          Reserve a device from now for days/hours/minutes
- POST /release          Release the caller's active reservation
- POST /login-activity   Record console login activity (reporting only)

Failure statuses:
- 404 device not found
- 400 device down / already reserved / zero duration / no active reservation
- 403 release attempted by someone other than the reserver
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from src.Controller.deps import get_DB, get_clock
from src.Core.time_utils import Clock
from src.Schemas import device as device_schema
from src.Schemas import reservation as reservation_schema
from src.Services import device_registry
from src.Services import reservation_ledger

router = APIRouter()


@router.post("/reserve", response_model=device_schema.Ok_response)
def reserve_device(
    request: reservation_schema.Reserve_request,
    db: Session = Depends(get_DB),
    clock: Clock = Depends(get_clock)
):
    """
    Reserve a device starting now.

    Example Request:
        POST /reserve
        {"device_id": 3, "user_name": "alice", "days": 0, "hours": 1, "minutes": 30}

    Returns:
        {"ok": true}
    """
    reservation_ledger.reserve(
        db,
        request.device_id,
        request.user_name,
        clock.now_ms(),
        days=request.days,
        hours=request.hours,
        minutes=request.minutes,
    )
    return {"ok": True}


@router.post("/release", response_model=device_schema.Ok_response)
def release_device(
    request: reservation_schema.Release_request,
    db: Session = Depends(get_DB),
    clock: Clock = Depends(get_clock)
):
    """
    Release the reservation active on a device right now.

    The reservation is truncated to the current instant, so the device shows
    as Available on the next poll.

    Returns:
        {"ok": true}
    """
    reservation_ledger.release(db, request.device_id, request.user_name, clock.now_ms())
    return {"ok": True}


@router.post("/login-activity", response_model=device_schema.Ok_response)
def set_login_activity(
    request: reservation_schema.Login_activity_request,
    db: Session = Depends(get_DB),
    clock: Clock = Depends(get_clock)
):
    """Record whether someone is logged in on the device console."""
    device_registry.record_login_activity(db, request.device_id, request.active, clock.now_ms())
    return {"ok": True}
