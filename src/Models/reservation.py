# src/Models/reservation.py
from sqlalchemy import Column, Integer, String, BigInteger, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import declared_attr, relationship
from src.DB.base_class import Base


class Reservation(Base):
    """
    SQLAlchemy model for a time-bounded hold on a device.

    A reservation is active at instant T when start_time <= T < end_time.
    Releasing early truncates end_time to the release instant; rows are
    never deleted except through the device cascade.

    Related models:
    - Device (N:1) - one device has many reservations over time
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "reservations"

    # ========================================
    # PRIMARY KEY
    # ========================================
    id = Column(Integer, primary_key=True, autoincrement=True)

    # ========================================
    # FOREIGN KEY
    # ========================================
    device_id = Column(
        Integer,
        ForeignKey('devices.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
        doc="Reserved device"
    )

    user_name = Column(
        String(200),
        nullable=False,
        doc="Free-text name of the person holding the reservation"
    )

    # ========================================
    # TEMPORAL BOUNDS (epoch milliseconds)
    # ========================================
    start_time = Column(
        BigInteger,
        nullable=False,
        doc="Instant the reservation was made"
    )

    end_time = Column(
        BigInteger,
        nullable=False,
        doc="Exclusive end of the hold; set to the release instant on early release"
    )

    device = relationship("Device", back_populates="reservations")

    # ========================================
    # TABLE CONSTRAINTS
    # ========================================
    __table_args__ = (
        Index('idx_reservations_device_window', 'device_id', 'start_time', 'end_time'),
        # Truncation may leave a zero-length row when released at its start instant
        CheckConstraint(
            "end_time >= start_time",
            name='check_reservation_time_order'
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id!r}, device_id={self.device_id!r}, "
            f"user_name={self.user_name!r}, start={self.start_time!r}, end={self.end_time!r})>"
        )
