# src/Services/seed.py

"""
Sample Lab Layout

Seeds a representative rack layout into an empty database when SEED_DATA is
enabled. Devices go through the registry so they get their liveness flag
exactly like devices created from the admin endpoints.
"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from src.Core import log_ws
from src.Repositories import device as device_repo
from src.Schemas.device import Device_create
from src.Services import device_registry


SAMPLE_DEVICES: List[Dict[str, Any]] = [
    # Development / HiSecOS, RACK13
    {"name": "40-03", "console_ip": "10.194.145.60", "console_port": 1004,
     "team": "Development", "section": "HiSecOS", "enable_ping": False, "location": "RACK13"},
    {"name": "40-03_EM", "console_ip": "10.194.145.60", "console_port": 1014,
     "team": "Development", "section": "HiSecOS", "enable_ping": False, "location": "RACK13"},
    {"name": "40-07", "console_ip": "10.194.145.100", "console_port": 1035,
     "team": "Development", "section": "HiSecOS", "enable_ping": False, "location": "RACK13"},
    {"name": "Train-FW", "team": "Development", "section": "HiSecOS",
     "enable_ping": True, "location": "RACK13"},
    {"name": "PC (Linux)", "device_ip": "10.194.145.33", "team": "Development",
     "section": "HiSecOS", "enable_ping": False, "location": "RACK13"},

    # Development / PRISM, RACK10
    {"name": "40-03 (STRCF)", "team": "Development", "section": "PRISM",
     "enable_ping": False, "location": "RACK10"},
    {"name": "40-4F (EATON)", "team": "Development", "section": "PRISM",
     "enable_ping": False, "location": "RACK10"},

    # QA / manual, RACK11
    {"name": "40-07", "device_ip": "10.194.145.8", "console_ip": "10.194.145.100",
     "console_port": 10033, "team": "QA", "section": "manual", "enable_ping": False,
     "location": "RACK11"},
    {"name": "40-4F", "device_ip": "10.194.145.12", "team": "QA", "section": "manual",
     "enable_ping": False, "location": "RACK11"},
    {"name": "Train FW", "team": "QA", "section": "manual", "enable_ping": True,
     "location": "RACK11"},

    # QA / regression, RACK12
    {"name": "20/30", "team": "QA", "section": "regression", "enable_ping": True,
     "location": "RACK12"},
    {"name": "40-03_EM", "device_ip": "10.194.145.66", "console_ip": "10.194.145.100",
     "console_port": 10006, "team": "QA", "section": "regression", "enable_ping": False,
     "location": "RACK12"},
    {"name": "40-4F", "device_ip": "10.194.145.23", "console_ip": "10.194.145.100",
     "console_port": 10041, "team": "QA", "section": "regression", "enable_ping": False,
     "location": "RACK12"},
]


def seed_devices(db: Session) -> int:
    """
    Insert SAMPLE_DEVICES if the device table is empty.

    Returns:
        int: Number of devices created (0 when the table already had rows)
    """
    if device_repo.count_devices(db) > 0:
        log_ws.log_from_thread("[SEED] Database already has devices, skipping seed data")
        return 0

    for fields in SAMPLE_DEVICES:
        device_registry.create_device(db, Device_create(**fields))

    log_ws.log_from_thread(f"[SEED] Seeded {len(SAMPLE_DEVICES)} sample devices")
    return len(SAMPLE_DEVICES)
