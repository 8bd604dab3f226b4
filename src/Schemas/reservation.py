# src/Schemas/reservation.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Reserve_request(BaseModel):
    """
    Payload of POST /reserve.

    The duration is given as separate day/hour/minute fields; missing or
    null components count as zero.
    """
    device_id: int
    user_name: Optional[str] = Field(None, max_length=200, description="Free-text claimant name")
    days: Optional[float] = 0
    hours: Optional[float] = 0
    minutes: Optional[float] = 0


class Release_request(BaseModel):
    """Payload of POST /release."""
    device_id: int
    user_name: Optional[str] = Field(None, max_length=200)


class Login_activity_request(BaseModel):
    """Payload of POST /login-activity."""
    device_id: int
    active: bool


class Reservation_get(BaseModel):
    """Stored reservation row (epoch-millisecond bounds)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: int
    user_name: str
    start_time: int
    end_time: int
