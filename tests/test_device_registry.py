import pytest
from pydantic import ValidationError

from src.Core.errors import InvalidArgumentError, NotFoundError
from src.Models.device_status import DeviceStatus
from src.Models.reservation import Reservation
from src.Repositories import device as device_repo
from src.Repositories import device_status as status_repo
from src.Schemas.device import Device_create, Device_update
from src.Services import device_registry, reservation_ledger
from src.Services.availability import get_device_view
from src.Services.seed import SAMPLE_DEVICES, seed_devices

from .conftest import MINUTE, T0


class TestCreateDevice:
    def test_defaults(self, db) -> None:
        device = device_registry.create_device(db, Device_create(name="40-03"))

        assert device.id is not None
        assert device.console_port == 23
        assert device.enable_ping is True
        assert device.team == "Development"
        assert device.device_ip == ""
        assert device.console_ip == ""
        assert device.section == ""

    def test_explicit_fields_are_kept(self, db) -> None:
        device = device_registry.create_device(
            db,
            Device_create(
                name="40-07", device_ip="10.194.145.8", console_ip="10.194.145.100",
                console_port=10033, enable_ping=False, team="QA", section="manual",
                owner="bob", location="RACK11",
            ),
        )

        assert (device.console_port, device.team, device.section) == (10033, "QA", "manual")
        assert device.owner == "bob"

    @pytest.mark.parametrize("port", [10.7, -1, 65536, "abc"])
    def test_invalid_console_port_is_rejected(self, port) -> None:
        with pytest.raises(ValidationError):
            Device_create(name="x", console_port=port)

    def test_numeric_string_console_port(self) -> None:
        assert Device_create(name="x", console_port="1004").console_port == 1004

    def test_falsy_console_port_means_default(self, db) -> None:
        device = device_registry.create_device(db, Device_create(name="x", console_port=0))
        assert device.console_port == 23

    def test_ping_disabled_device_starts_up(self, db) -> None:
        device = device_registry.create_device(db, Device_create(name="x", enable_ping=False))

        status = status_repo.get_status(db, device.id)
        assert status.is_up is True
        assert get_device_view(db, device.id, T0).status == "Up"

    def test_pinged_device_starts_down(self, db) -> None:
        device = device_registry.create_device(db, Device_create(name="x", device_ip="10.0.0.1"))

        assert status_repo.get_status(db, device.id).is_up is False
        assert get_device_view(db, device.id, T0).availability == "Not Available"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_name_is_required(self, db, name) -> None:
        with pytest.raises(InvalidArgumentError, match="Name is required"):
            device_registry.create_device(db, Device_create(name=name))

        assert device_repo.count_devices(db) == 0


class TestUpdateDevice:
    def test_only_provided_fields_change(self, make_device, db) -> None:
        device = make_device(owner="alice", location="RACK13")

        updated = device_registry.update_device(db, device.id, Device_update(location="RACK10", owner=None))

        assert updated.location == "RACK10"
        assert updated.owner == "alice"
        assert updated.name == "40-03"

    def test_empty_string_clears_field(self, make_device, db) -> None:
        device = make_device(owner="alice")

        updated = device_registry.update_device(db, device.id, Device_update(owner=""))

        assert updated.owner == ""

    def test_empty_console_port_resets_to_default(self, make_device, db) -> None:
        device = make_device(console_port=1004)

        updated = device_registry.update_device(db, device.id, Device_update(console_port=""))

        assert updated.console_port == 23

    @pytest.mark.parametrize("name", ["", "  "])
    def test_blank_name_is_rejected(self, make_device, db, name) -> None:
        device = make_device()

        with pytest.raises(InvalidArgumentError, match="Name cannot be empty"):
            device_registry.update_device(db, device.id, Device_update(name=name))

        assert device_repo.get_device_by_id(db, device.id).name == "40-03"

    def test_unknown_device(self, db) -> None:
        with pytest.raises(NotFoundError, match="Device not found"):
            device_registry.update_device(db, 99, Device_update(owner="x"))

    def test_disabling_ping_does_not_touch_liveness(self, make_device, db) -> None:
        device = make_device(device_ip="10.0.0.1")

        device_registry.update_device(db, device.id, Device_update(enable_ping=False))

        assert status_repo.get_status(db, device.id).is_up is False
        assert get_device_view(db, device.id, T0).status == "Up"


class TestDeleteDevice:
    def test_removes_status_and_reservations(self, make_device, db) -> None:
        device = make_device(enable_ping=False)
        device_id = device.id
        reservation_ledger.reserve(db, device_id, "alice", T0, minutes=30)

        device_registry.delete_device(db, device_id)

        assert device_repo.get_device_by_id(db, device_id) is None
        assert db.query(DeviceStatus).filter(DeviceStatus.device_id == device_id).count() == 0
        assert db.query(Reservation).filter(Reservation.device_id == device_id).count() == 0

    def test_unknown_device(self, db) -> None:
        with pytest.raises(NotFoundError):
            device_registry.delete_device(db, 7)


class TestOverrides:
    def test_override_liveness(self, make_device, db) -> None:
        device = make_device(device_ip="10.0.0.1")

        device_registry.override_liveness(db, device.id, True, T0 + MINUTE)

        status = status_repo.get_status(db, device.id)
        assert status.is_up is True
        assert status.last_checked == T0 + MINUTE

    def test_override_unknown_device(self, db) -> None:
        with pytest.raises(NotFoundError):
            device_registry.override_liveness(db, 5, True, T0)

    def test_login_activity_is_reported_only(self, make_device, db) -> None:
        device = make_device(enable_ping=False)

        device_registry.record_login_activity(db, device.id, True, T0)

        view = get_device_view(db, device.id, T0)
        assert view.loginActivity == "Yes"
        assert view.availability == "Available"
        reservation_ledger.reserve(db, device.id, "alice", T0, minutes=5)


class TestSeed:
    def test_seeds_empty_database_once(self, db) -> None:
        assert seed_devices(db) == len(SAMPLE_DEVICES)
        assert seed_devices(db) == 0
        assert device_repo.count_devices(db) == len(SAMPLE_DEVICES)

    def test_skips_when_devices_exist(self, make_device, db) -> None:
        make_device()

        assert seed_devices(db) == 0
        assert device_repo.count_devices(db) == 1
