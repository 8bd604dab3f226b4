# src/Schemas/device.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional

from src.Models.device import DEFAULT_CONSOLE_PORT, DEFAULT_TEAM


def _console_port_or_default(value: Any) -> Any:
    # Empty or falsy ports fall back to the telnet default; anything else is
    # left to the integer and range checks on the field
    if not value:
        return DEFAULT_CONSOLE_PORT
    return value


class Device_base(BaseModel):
    """
    Common device attributes shared by create and update payloads.
    Mirrors the columns of the devices table.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = Field(None, max_length=200, description="Display name (required on create)")
    device_ip: Optional[str] = Field(None, max_length=100, description="Management IP probed for liveness")
    console_ip: Optional[str] = Field(None, max_length=100, description="Console server IP")
    console_port: Optional[int] = Field(
        None, ge=1, le=65535, description="Console server port (23 when empty)"
    )
    enable_ping: Optional[bool] = Field(None, description="False forces the device Up")
    description: Optional[str] = None
    team: Optional[str] = Field(None, max_length=100, description="e.g. 'Development', 'QA'")
    section: Optional[str] = Field(None, max_length=100, description="e.g. 'PRISM', 'HiSecOS', 'manual'")
    owner: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200, description="e.g. 'RACK13'")


class Device_create(Device_base):
    """
    Schema for registering a new device.

    Only name is required (checked by the registry so the error message is
    uniform); every other field falls back to the column default.
    """
    model_config = ConfigDict(from_attributes=True, validate_default=True)

    @field_validator("console_port", mode="before")
    @classmethod
    def _default_console_port(cls, value: Any) -> Any:
        return _console_port_or_default(value)

    @field_validator("enable_ping", mode="before")
    @classmethod
    def _default_enable_ping(cls, value: Any) -> Any:
        return True if value is None else value

    @field_validator("team", mode="before")
    @classmethod
    def _default_team(cls, value: Any) -> Any:
        return value or DEFAULT_TEAM

    @field_validator("device_ip", "console_ip", "description", "section", "owner", "location", mode="before")
    @classmethod
    def _default_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Device_update(Device_base):
    """
    Schema for partial device updates.

    Fields left out of the payload (or sent as null) keep their stored value;
    fields sent as an empty string clear it. console_port is the exception:
    any empty or falsy value resets it to 23.
    """

    @field_validator("console_port", mode="before")
    @classmethod
    def _default_console_port(cls, value: Any) -> Any:
        return _console_port_or_default(value)

    def changes(self) -> dict:
        """Explicitly provided fields, with nulls dropped (console_port excepted)."""
        provided = self.model_dump(exclude_unset=True)
        return {
            key: value for key, value in provided.items()
            if value is not None
        }


class Device_status_update(BaseModel):
    """Manual override of the liveness flag."""
    is_up: bool


class Device_view(BaseModel):
    """
    Derived, point-in-time view of a device as shown by the dashboard.
    Field names follow the JSON contract consumed by the frontend.
    """
    id: int
    name: str
    deviceIp: str
    telnet: str
    status: str
    reservedBy: str
    loginActivity: str
    availability: str
    nextAvailableTime: str
    team: str
    section: str
    sectionGroup: str
    owner: str
    location: str


class Device_created(BaseModel):
    ok: bool = True
    id: int


class Ok_response(BaseModel):
    ok: bool = True
