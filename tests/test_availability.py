from src.Models.device import Device
from src.Models.device_status import DeviceStatus
from src.Models.reservation import Reservation
from src.Services.availability import (
    Availability,
    effective_liveness,
    get_device_view,
    list_device_views,
    resolve_device_view,
    telnet_string,
)
from src.Services import reservation_ledger
from src.Core.errors import NotFoundError

import pytest

from .conftest import HOUR, MINUTE, T0


def _device(**overrides) -> Device:
    fields = dict(
        id=1, name="40-07", device_ip="10.194.145.8", console_ip="10.194.145.100",
        console_port=10033, enable_ping=True, description="", team="QA",
        section="manual", owner="", location="RACK11",
    )
    fields.update(overrides)
    return Device(**fields)


def _status(is_up: bool = True, login_activity: bool = False) -> DeviceStatus:
    return DeviceStatus(device_id=1, is_up=is_up, last_checked=0, login_activity=login_activity)


def _reservation(user: str = "alice", start: int = T0, end: int = T0 + 90 * MINUTE) -> Reservation:
    return Reservation(id=1, device_id=1, user_name=user, start_time=start, end_time=end)


class TestEffectiveLiveness:
    def test_ping_disabled_forces_up(self) -> None:
        assert effective_liveness(_device(enable_ping=False), _status(is_up=False)) is True
        assert effective_liveness(_device(enable_ping=False), None) is True

    def test_ping_enabled_uses_flag(self) -> None:
        assert effective_liveness(_device(), _status(is_up=True)) is True
        assert effective_liveness(_device(), _status(is_up=False)) is False

    def test_missing_flag_counts_as_down(self) -> None:
        assert effective_liveness(_device(), None) is False


class TestResolveDeviceView:
    def test_down_device_is_not_available_even_when_reserved(self) -> None:
        view = resolve_device_view(_device(), _status(is_up=False), _reservation(), T0)

        assert view.availability == Availability.NOT_AVAILABLE.value
        assert view.status == "Down"
        assert view.reservedBy == "—"
        assert view.nextAvailableTime == "—"
        assert view.loginActivity == "—"

    def test_reserved_device_is_in_use(self) -> None:
        view = resolve_device_view(_device(), _status(), _reservation(), T0)

        assert view.availability == "In Use"
        assert view.reservedBy == "alice"
        assert view.nextAvailableTime == "1h 30m"
        assert view.status == "Up"

    def test_next_available_counts_from_now(self) -> None:
        view = resolve_device_view(_device(), _status(), _reservation(), T0 + HOUR)
        assert view.nextAvailableTime == "30m"

    def test_free_device_is_available_now(self) -> None:
        view = resolve_device_view(_device(), _status(login_activity=True), None, T0)

        assert view.availability == "Available"
        assert view.reservedBy == "—"
        assert view.nextAvailableTime == "Now"
        assert view.loginActivity == "Yes"

    def test_display_fields(self) -> None:
        view = resolve_device_view(_device(device_ip="", section="Manual "), _status(), None, T0)

        assert view.deviceIp == "—"
        assert view.telnet == "telnet 10.194.145.100 10033"
        assert view.team == "QA"
        assert view.section == "Manual "
        assert view.sectionGroup == "Manual"
        assert view.location == "RACK11"

    def test_is_idempotent(self) -> None:
        device, status, active = _device(), _status(), _reservation()

        first = resolve_device_view(device, status, active, T0 + 5 * MINUTE)
        second = resolve_device_view(device, status, active, T0 + 5 * MINUTE)

        assert first == second
        assert active.end_time == T0 + 90 * MINUTE


class TestTelnetString:
    def test_blank_console_ip(self) -> None:
        assert telnet_string("", 23) == "—"
        assert telnet_string("   ", 23) == "—"
        assert telnet_string(None, 23) == "—"

    def test_address_and_port(self) -> None:
        assert telnet_string("10.194.145.60", 1004) == "telnet 10.194.145.60 1004"


class TestStoredViews:
    def test_list_is_in_creation_order(self, db, make_device) -> None:
        ids = [make_device(name=name, enable_ping=False).id for name in ("b", "a", "c")]

        views = list_device_views(db, T0)

        assert [v.id for v in views] == sorted(ids)
        assert [v.name for v in views] == ["b", "a", "c"]

    def test_list_reflects_active_reservations(self, db, make_device) -> None:
        reserved = make_device(name="reserved", enable_ping=False)
        free = make_device(name="free", enable_ping=False)
        reservation_ledger.reserve(db, reserved.id, "alice", T0, minutes=30)

        views = {v.id: v for v in list_device_views(db, T0 + MINUTE)}

        assert views[reserved.id].availability == "In Use"
        assert views[reserved.id].nextAvailableTime == "29m"
        assert views[free.id].availability == "Available"

    def test_same_state_same_view(self, db, make_device) -> None:
        device = make_device(enable_ping=False)
        reservation_ledger.reserve(db, device.id, "alice", T0, hours=2)

        assert list_device_views(db, T0 + 7 * MINUTE) == list_device_views(db, T0 + 7 * MINUTE)

    def test_single_view_unknown_device(self, db) -> None:
        with pytest.raises(NotFoundError):
            get_device_view(db, 999, T0)
