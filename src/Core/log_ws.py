"""
Log WebSocket Module
====================

Central logging entry point of the service. Every message is written to the
console with its component tag and, when monitoring clients are connected to
the /logs WebSocket, broadcast to them as JSON:

    {
        "msg_type": "log" | "error" | "warning",
        "message": "[LEDGER] Device 3 reserved by alice until 1718035200000"
    }

Usage Example:
-------------
    from src.Core import log_ws

    log_ws.log_from_thread("[REGISTRY] Device 4 created")
    log_ws.log_from_thread("[PROBE] Ping failed for 10.0.0.9", "warning")
"""

from typing import Dict, Any
from fastapi import WebSocket
from .wsBase import WebSocketManager


def log_from_thread(message: str, msg_type: str = "log"):
    """
    Log a message to the console and to connected /logs clients.

    Safe to call from request handlers, background threads and startup code.

    Args:
        message: Log line, conventionally prefixed with a "[COMPONENT]" tag
        msg_type: "log" (default), "warning" or "error"
    """
    print(message)

    if log_ws_manager.has_clients:
        payload: Dict[str, Any] = {"msg_type": msg_type, "message": str(message)}
        log_ws_manager.send_from_thread(payload)


class LogWebSocketManager(WebSocketManager):
    """WebSocket manager for the /logs monitoring stream."""

    async def handle_message(self, ws: WebSocket, message: str):
        # The stream is one-way; client messages only serve as keepalives
        if message.strip().lower() == "ping":
            await ws.send_text('{"msg_type": "pong"}')


# ============================================================
# GLOBAL LOG WEBSOCKET MANAGER INSTANCE
# ============================================================
log_ws_manager = LogWebSocketManager()
