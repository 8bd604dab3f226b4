#src/Controller/deps.py

from typing import Generator
from src.Core.time_utils import Clock, system_clock
from src.DB.session import SessionLocal

def get_DB() -> Generator:
    DB = SessionLocal()
    try:
        yield DB
    finally:
        DB.close()

def get_clock() -> Clock:
    return system_clock
