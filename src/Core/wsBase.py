"""
WebSocket Base Manager Module
==============================

Thread-safe bookkeeping for WebSocket clients of the lab reservation service.

Request handlers run in FastAPI's threadpool and the liveness probe runs in a
daemon thread, so broadcasts may originate outside the event loop.
send_from_thread() schedules the broadcast coroutine on the main loop
registered at startup.

Usage Example:
-------------
    manager = WebSocketManager()
    manager.set_main_loop(asyncio.get_running_loop())

    @app.websocket("/stream")
    async def stream(ws: WebSocket):
        await manager.register(ws)
        try:
            while True:
                await manager.handle_message(ws, await ws.receive_text())
        finally:
            manager.unregister(ws)
"""

from fastapi import WebSocket
import asyncio
from typing import List, Optional, Dict, Any
import json
import threading


class WebSocketManager:
    """
    Base manager for a set of connected WebSocket clients.

    Attributes:
        clients (List[WebSocket]): Currently registered connections
        main_loop (Optional[asyncio.AbstractEventLoop]): Loop used by send_from_thread()
    """

    def __init__(self):
        self.clients: List[WebSocket] = []
        self.main_loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock = threading.Lock()

    def set_main_loop(self, loop: asyncio.AbstractEventLoop):
        """Remember FastAPI's event loop; call once from the lifespan handler."""
        self.main_loop = loop

    async def register(self, ws: WebSocket):
        """
        Accept a connection and start tracking it.

        The client is tracked before the handshake so no broadcast issued
        during accept() is missed. A failed handshake untracks it again.
        """
        with self._lock:
            if ws not in self.clients:
                self.clients.append(ws)

        try:
            await ws.accept()
            print(f"[WSBase] Client registered. Total clients: {len(self.clients)}")
        except Exception:
            self.unregister(ws)
            raise

    def unregister(self, ws: WebSocket):
        """Stop tracking a connection. Safe to call more than once."""
        with self._lock:
            if ws in self.clients:
                self.clients.remove(ws)
                print(f"[WSBase] Client unregistered. Total clients: {len(self.clients)}")

    @property
    def has_clients(self) -> bool:
        with self._lock:
            return len(self.clients) > 0

    async def broadcast(self, message: Dict[str, Any]):
        """
        Send a JSON message to every client.

        Clients whose send fails are dropped after the loop.
        """
        with self._lock:
            current_clients = list(self.clients)

        dead = []
        for ws in current_clients:
            try:
                await ws.send_text(json.dumps(message))
            except Exception:
                dead.append(ws)

        for ws in dead:
            self.unregister(ws)

    def send_from_thread(self, message: Dict[str, Any]):
        """
        Schedule a broadcast from synchronous code (fire and forget).

        Does nothing when no client is connected or the main loop has not
        been registered yet.
        """
        if not self.has_clients or self.main_loop is None:
            return

        asyncio.run_coroutine_threadsafe(self.broadcast(message), self.main_loop)

    async def handle_message(self, ws: WebSocket, message: str):
        """Hook for incoming client messages; subclasses override it."""
        print(f"[WSBase] Received message from client: {message}")
