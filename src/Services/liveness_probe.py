# src/Services/liveness_probe.py

"""
Liveness Probe Service

Periodically refreshes the Up/Down flag of every device.

Key features:
- Devices with ping disabled are marked Up without being probed.
- Other devices are pinged once on their management IP; a blank IP or a
  failing probe marks them Down.
- Every cycle stamps last_checked with the cycle instant.
- Runs in a daemon thread; one cycle runs immediately at startup.

Only device_status is written here; reservations are never touched.
"""

import subprocess
import threading
import time
from typing import Callable, Optional

from sqlalchemy.orm import Session

from src.Core import log_ws
from src.Core.config import settings
from src.Core.time_utils import Clock, system_clock
from src.DB.session import SessionLocal
from src.Repositories import device as device_repo
from src.Repositories import device_status as status_repo

ProbeFn = Callable[[str, int], bool]


def ping_host(host: str, timeout_s: int) -> bool:
    """
    Send a single ICMP echo request using the system ping binary.

    Returns:
        bool: True if the host answered within the timeout
    """
    result = subprocess.run(
        ["ping", "-c", "1", "-W", str(timeout_s), host],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        timeout=timeout_s + 1,
    )
    return result.returncode == 0


def run_probe_cycle(
    db: Session,
    clock: Clock = system_clock,
    probe: ProbeFn = ping_host,
    timeout_s: Optional[int] = None
) -> int:
    """
    Probe every device once and store the results.

    Args:
        db: SQLAlchemy session
        clock: Time source for last_checked
        probe: Callable (host, timeout_s) -> bool
        timeout_s: Per-device timeout (defaults to settings.PROBE_TIMEOUT_S)

    Returns:
        int: Number of devices found Up
    """
    if timeout_s is None:
        timeout_s = settings.PROBE_TIMEOUT_S

    up_count = 0
    for device in device_repo.get_all_devices(db):
        if not device.enable_ping:
            is_up = True
        elif not device.device_ip or not device.device_ip.strip():
            is_up = False
        else:
            try:
                is_up = probe(device.device_ip.strip(), timeout_s)
            except Exception as e:
                log_ws.log_from_thread(
                    f"[PROBE] Probe of {device.device_ip} failed: {e}", msg_type="warning"
                )
                is_up = False

        status_repo.set_liveness(db, device.id, is_up, clock.now_ms())
        if is_up:
            up_count += 1

    return up_count


def _probe_loop(interval_s: int):
    while True:
        try:
            with SessionLocal() as db:
                up_count = run_probe_cycle(db)
            log_ws.log_from_thread(f"[PROBE] Cycle done, {up_count} device(s) up")
        except Exception as e:
            log_ws.log_from_thread(f"[PROBE] Cycle failed: {e}", msg_type="error")

        time.sleep(interval_s)


def start_liveness_probe(interval_s: Optional[int] = None) -> threading.Thread:
    """
    Launch the probe loop in a daemon thread.

    Returns:
        threading.Thread: The background probe thread
    """
    if interval_s is None:
        interval_s = settings.PROBE_INTERVAL_S

    thread = threading.Thread(
        target=_probe_loop, args=(interval_s,), daemon=True, name="Liveness-Probe"
    )
    thread.start()

    print(f"[PROBE] Background liveness probe started (every {interval_s}s)")

    return thread
