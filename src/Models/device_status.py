# src/Models/device_status.py
from sqlalchemy import Column, Integer, BigInteger, Boolean, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from src.DB.base_class import Base


class DeviceStatus(Base):
    """
    Liveness flag of a device (one row per device).

    Written by the liveness probe and the manual override endpoint only;
    reservation logic never touches it.

    Related models:
    - Device (1:1) - created together with the device, deleted with it
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "device_status"

    device_id = Column(
        Integer,
        ForeignKey('devices.id', ondelete='CASCADE'),
        primary_key=True,
        doc="Device this flag belongs to"
    )

    is_up = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="Last probe result (ignored when the device has ping disabled)"
    )

    last_checked = Column(
        BigInteger,
        nullable=False,
        default=0,
        doc="Epoch milliseconds of the last probe or override (0 = never)"
    )

    login_activity = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="Whether someone is logged in on the console (reporting only)"
    )

    device = relationship("Device", back_populates="status")

    def __repr__(self) -> str:
        return (
            f"<DeviceStatus(device_id={self.device_id!r}, is_up={self.is_up!r}, "
            f"last_checked={self.last_checked!r})>"
        )
