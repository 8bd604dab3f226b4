# src/Models/device.py

"""
Device Model - Lab Hardware Registry

SQLAlchemy model for the shared lab devices users can reserve.

A device is identified by an auto-incrementing integer id; creation order
(ascending id) is the stable order in which devices are listed. Besides its
display name, a device carries the address used to probe it, the console
server address used to reach it over telnet, and free-text grouping
attributes (team, section, owner, location) used by the dashboard.

Database Table: devices
Primary Key: id (Integer)

Usage:
    from src.Models.device import Device
    from src.DB.session import SessionLocal

    db = SessionLocal()
    device = Device(
        name="40-07",
        device_ip="10.194.145.8",
        console_ip="10.194.145.100",
        console_port=10033,
        team="QA",
        section="manual",
    )
    db.add(device)
    db.commit()
"""

from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy import Column, Integer, String, Boolean, Text
from src.DB.base_class import Base


DEFAULT_CONSOLE_PORT = 23
DEFAULT_TEAM = "Development"


class Device(Base):
    """
    SQLAlchemy model representing a reservable lab device.

    Schema:
    - id (PK): Auto-incrementing identifier
    - name: Display name (required, not unique: racks hold several "40-03")
    - device_ip: Management address used by the liveness probe ("" if none)
    - console_ip / console_port: Console server endpoint for telnet access
    - enable_ping: When False the device is always considered Up
    - description, team, section, owner, location: Free-text metadata

    Relationships:
    - One-to-one with DeviceStatus (liveness flag), deleted with the device
    - One-to-many with Reservation (history retained), deleted with the device
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Fixed table name for the device registry"""
        return "devices"

    # ============================================================
    # Primary Key
    # ============================================================
    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Device identifier; ascending ids give creation order"
    )

    # ============================================================
    # Identity & Network
    # ============================================================
    name = Column(
        String(200),
        nullable=False,
        doc="Human-readable device name for display in the dashboard"
    )

    device_ip = Column(
        String(100),
        nullable=False,
        default="",
        doc="Management IP probed for liveness (empty when unknown)"
    )

    console_ip = Column(
        String(100),
        nullable=False,
        default="",
        doc="Console server IP (empty when the device has no console access)"
    )

    console_port = Column(
        Integer,
        nullable=False,
        default=DEFAULT_CONSOLE_PORT,
        doc="Console server TCP port"
    )

    enable_ping = Column(
        Boolean,
        nullable=False,
        default=True,
        doc="Whether the liveness probe pings this device; False forces Up"
    )

    # ============================================================
    # Grouping Metadata
    # ============================================================
    description = Column(Text, nullable=False, default="")

    team = Column(
        String(100),
        nullable=False,
        default=DEFAULT_TEAM,
        doc="Owning team, e.g. 'Development' or 'QA'"
    )

    section = Column(
        String(100),
        nullable=False,
        default="",
        doc="Free-text section, classified into canonical buckets by the resolver"
    )

    owner = Column(String(200), nullable=False, default="")

    location = Column(
        String(200),
        nullable=False,
        default="",
        doc="Physical location, e.g. 'RACK13'"
    )

    # ============================================================
    # Relationships
    # ============================================================
    status = relationship(
        "DeviceStatus",
        uselist=False,
        back_populates="device",
        cascade="all, delete-orphan",
    )

    reservations = relationship(
        "Reservation",
        back_populates="device",
        cascade="all, delete-orphan",
        order_by="Reservation.id",
    )

    def __repr__(self) -> str:
        return f"<Device(id={self.id!r}, name={self.name!r}, team={self.team!r})>"
