# src/Services/availability.py

"""
Availability Resolver

Turns stored rows (device, liveness flag, active reservation) into the
point-in-time view shown by the dashboard.

Resolution rules for a device at instant `now`:
    1. Effective liveness is True when ping is disabled for the device,
       otherwise the stored is_up flag (a missing flag counts as down).
    2. Not live                -> "Not Available", next "—", reserved by "—"
    3. Active reservation      -> "In Use", reserved by its user,
                                  next = time left until end_time
    4. Otherwise               -> "Available", next "Now", reserved by "—"

resolve_device_view() is a pure function: the same rows and the same `now`
always produce the same view, and nothing is written.
"""

from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from src.Core.errors import NotFoundError
from src.Core.time_utils import format_duration
from src.Models.device import Device
from src.Models.device_status import DeviceStatus
from src.Models.reservation import Reservation
from src.Repositories import device as device_repo
from src.Repositories import reservation as reservation_repo
from src.Schemas.device import Device_view
from src.Services.sections import classify_section


PLACEHOLDER = "—"


class Availability(str, Enum):
    AVAILABLE = "Available"
    IN_USE = "In Use"
    NOT_AVAILABLE = "Not Available"


def effective_liveness(device: Device, status: Optional[DeviceStatus]) -> bool:
    """Liveness after applying the "ping disabled -> always up" override."""
    if not device.enable_ping:
        return True
    return bool(status is not None and status.is_up)


def telnet_string(console_ip: Optional[str], console_port: Optional[int]) -> str:
    """Console connection string, or "—" when the device has no console address."""
    if not console_ip or not console_ip.strip():
        return PLACEHOLDER
    return f"telnet {console_ip.strip()} {console_port}"


def resolve_device_view(
    device: Device,
    status: Optional[DeviceStatus],
    active: Optional[Reservation],
    now: int
) -> Device_view:
    """
    Compute the dashboard row of one device.

    Args:
        device: Device row
        status: Its liveness flag (may be None)
        active: Reservation active at `now`, if any
        now: Evaluation instant in epoch milliseconds

    Returns:
        Device_view
    """
    is_up = effective_liveness(device, status)

    if not is_up:
        availability = Availability.NOT_AVAILABLE
        next_available = PLACEHOLDER
        reserved_by = PLACEHOLDER
    elif active is not None:
        availability = Availability.IN_USE
        next_available = format_duration(active.end_time - now)
        reserved_by = active.user_name or PLACEHOLDER
    else:
        availability = Availability.AVAILABLE
        next_available = "Now"
        reserved_by = PLACEHOLDER

    # Reporting only, never part of the availability decision
    if is_up:
        login_activity = "Yes" if status is not None and status.login_activity else "No"
    else:
        login_activity = PLACEHOLDER

    return Device_view(
        id=device.id,
        name=device.name,
        deviceIp=device.device_ip or PLACEHOLDER,
        telnet=telnet_string(device.console_ip, device.console_port),
        status="Up" if is_up else "Down",
        reservedBy=reserved_by,
        loginActivity=login_activity,
        availability=availability.value,
        nextAvailableTime=next_available,
        team=device.team or "Development",
        section=device.section or "",
        sectionGroup=classify_section(device.section).value,
        owner=device.owner or "",
        location=device.location or "",
    )


def list_device_views(db: Session, now: int) -> List[Device_view]:
    """Views of every device, in creation order, evaluated at `now`."""
    devices = device_repo.get_all_devices(db)
    active_by_device = reservation_repo.get_active_reservations(db, now)

    return [
        resolve_device_view(device, device.status, active_by_device.get(device.id), now)
        for device in devices
    ]


def get_device_view(db: Session, device_id: int, now: int) -> Device_view:
    """
    View of a single device evaluated at `now`.

    Raises:
        NotFoundError: Unknown device id
    """
    device = device_repo.get_device_by_id(db, device_id)
    if device is None:
        raise NotFoundError("Device not found")

    active = reservation_repo.get_active_reservation(db, device_id, now)
    return resolve_device_view(device, device.status, active, now)
