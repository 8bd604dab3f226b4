"""
src/DB/base.py
==========================
SQLAlchemy Model Registry
==========================

Imports every model so that Base.metadata is complete before create_all()
or Alembic autogeneration runs.

Models Registered:
-----------------
- Device: Lab hardware registry (identity, network/console metadata, grouping)
- DeviceStatus: Per-device liveness flag written by the probe
- Reservation: Time-bounded holds on a device (history retained)
- InventoryItem: Spare hardware stock counters

Important:
----------
Any new model class MUST be imported here.
"""

from src.DB.base_class import Base

# ============================================================
# MODEL IMPORTS - DO NOT REMOVE
# ============================================================
from src.Models.device import Device
from src.Models.device_status import DeviceStatus
from src.Models.reservation import Reservation
from src.Models.inventory import InventoryItem
