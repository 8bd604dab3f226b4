"""
src/main.py
============================================
FastAPI Application for Lab Device Reservations
============================================

Main entry point of the lab reservation service: shared lab hardware
(firewalls, PCs behind telnet console servers) is listed with its live
availability, and users reserve exclusive time slots on it.

Architecture Overview:
---------------------
- REST API: device registry, reserve/release, inventory (JSON, polled by the dashboard)
- WebSocket: real-time service logs streamed via /logs
- Background Services: optional liveness probe refreshing Up/Down flags

Run:
    uvicorn src.main:app --host 0.0.0.0 --port 5001
"""

# Environment Configuration
from dotenv import load_dotenv
import os
load_dotenv()

# FastAPI Core
from fastapi import FastAPI, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from src.Core.config import settings
from src.Core.errors import ServiceError
from src.Controller.Routes import devices, reservations, inventory
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import asyncio

# Background Services
from src.Services.liveness_probe import start_liveness_probe
from src.Services.seed import seed_devices

# WebSocket Management (service logs)
from src.Core import log_ws

# Database
from src.DB.base import Base
from src.DB.session import SessionLocal, engine

# ============================================================
# DEPLOYMENT CONFIGURATION #1: ROOT PATH HANDLING
# ============================================================
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import RedirectResponse

# Extract root path for subdirectory deployment (e.g. ROOT_PATH=/api)
ROOT_PATH = os.getenv("ROOT_PATH", "").strip()
if ROOT_PATH:
    if not ROOT_PATH.startswith("/"):
        ROOT_PATH = "/" + ROOT_PATH
    if ROOT_PATH.endswith("/"):
        ROOT_PATH = ROOT_PATH[:-1]


class StripPrefixMiddleware(BaseHTTPMiddleware):
    """
    Removes the ROOT_PATH prefix from incoming requests.

    Example:
        ROOT_PATH = "/api"
        Incoming request: /api/devices
        FastAPI receives: /devices
    """

    def __init__(self, app, prefix: str):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request, call_next):
        if self.prefix:
            path = request.url.path

            if path == self.prefix:
                return RedirectResponse(url=self.prefix + "/", status_code=307)

            if path.startswith(self.prefix + "/"):
                request.scope["path"] = path[len(self.prefix):] or "/"

        return await call_next(request)


# ============================================================
# DEPLOYMENT CONFIGURATION #2: DYNAMIC CORS CONFIGURATION
# ============================================================
from fastapi.middleware.cors import CORSMiddleware


def _parse_origins(csv_value: str):
    """
    Parse comma-separated origins for CORS configuration.

    Returns:
        Tuple of (is_wildcard: bool, origins: list)

    Examples:
        "*" → (True, ["*"])
        "https://lab.example.com,http://localhost:3000" → (False, [...])
        "" → (False, [])
    """
    if not csv_value:
        return (False, [])

    csv_value = csv_value.strip()

    if csv_value == "*":
        return (True, ["*"])

    origins = [origin.strip() for origin in csv_value.split(",") if origin.strip()]
    return (False, origins)


_http_allow_all, _http_origins = _parse_origins(
    os.getenv("HTTP_ALLOWED_ORIGINS", "*")
)
_ws_allow_all, _ws_origins = _parse_origins(
    os.getenv("WS_ALLOWED_ORIGINS", "*")
)


# ============================================================
# INSTANCE IDENTIFICATION MIDDLEWARE
# ============================================================
class InstanceHeaderMiddleware(BaseHTTPMiddleware):
    """Adds X-Instance-ID to every response when INSTANCE_ID is set."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)

        instance_id = os.getenv("INSTANCE_ID")
        if instance_id:
            response.headers["X-Instance-ID"] = instance_id

        return response


# ============================================================
# APPLICATION LIFESPAN MANAGEMENT
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup Sequence:
        1. Register the event loop with the log WebSocket manager
        2. Create missing tables (AUTO_CREATE_TABLES)
        3. Seed the sample rack layout into an empty database (SEED_DATA)
        4. Start the liveness probe (PROBE_ENABLED)
    """
    loop = asyncio.get_running_loop()
    log_ws.log_ws_manager.set_main_loop(loop)

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        print("[STARTUP] ✅ Database tables ensured")

    if settings.SEED_DATA:
        with SessionLocal() as db:
            seed_devices(db)
    else:
        print("[STARTUP] SEED_DATA not enabled, add devices via the admin endpoints")

    if settings.PROBE_ENABLED:
        start_liveness_probe()
    else:
        print("[SERVICES] ⚠️  Liveness probe is disabled")

    print("[STARTUP] ✅ Application initialization complete")

    yield

    print("[SHUTDOWN] 🛑 Application shutdown initiated")


# ============================================================
# APPLICATION INSTANCE CREATION
# ============================================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    lifespan=lifespan
)


# ============================================================
# MIDDLEWARE REGISTRATION
# ============================================================
# Middlewares run in REVERSE order of registration

if ROOT_PATH:
    app.add_middleware(StripPrefixMiddleware, prefix=ROOT_PATH)

app.add_middleware(InstanceHeaderMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_http_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLERS
# ============================================================
# Every failure is rendered as {"error": "<message>"}

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log_ws.log_from_thread(f"[API] ❌ Unexpected error on {request.url.path}: {exc}", msg_type="error")
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ============================================================
# HEALTH CHECK ENDPOINT
# ============================================================
@app.get("/health")
def health():
    """Liveness endpoint for load balancers and container orchestrators."""
    return {"status": "ok"}


# ============================================================
# REST API ROUTE REGISTRATION
# ============================================================
app.include_router(devices.router, prefix="/devices", tags=["devices"])
app.include_router(reservations.router, tags=["reservations"])
app.include_router(inventory.router, prefix="/inventory", tags=["inventory"])


# ============================================================
# WEBSOCKET ENDPOINTS
# ============================================================
async def socket_handler(ws: WebSocket, manager):
    """
    Generic WebSocket lifecycle: origin check, register, message loop, cleanup.

    Connections from origins outside WS_ALLOWED_ORIGINS are closed with 403.
    """
    origin = ws.headers.get("origin")

    if (not _ws_allow_all) and (origin not in _ws_origins):
        print(f"[WS] ❌ Connection rejected - unauthorized origin: {origin}")
        await ws.close(code=403)
        return

    await manager.register(ws)

    try:
        while True:
            message = await ws.receive_text()
            await manager.handle_message(ws, message)
    except Exception as e:
        print(f"[WS] Connection closed: {e}")
    finally:
        manager.unregister(ws)


@app.websocket("/logs")
async def websocket_logs(ws: WebSocket):
    """
    Real-time service log stream.

    Message Format:
        {"msg_type": "log" | "error" | "warning", "message": "..."}
    """
    await socket_handler(ws, log_ws.log_ws_manager)


# ============================================================
# API INFORMATION ENDPOINT
# ============================================================
@app.get("/api")
def api_info():
    """Service status, enabled features and available endpoints."""
    return {
        "status": "online",
        "version": settings.PROJECT_VERSION,
        "features": {
            "liveness_probe": settings.PROBE_ENABLED,
            "probe_interval_s": settings.PROBE_INTERVAL_S,
            "websockets": ["/logs"],
            "instance_tracking": bool(os.getenv("INSTANCE_ID"))
        },
        "endpoints": {
            "devices": "/devices",
            "reserve": "/reserve",
            "release": "/release",
            "inventory": "/inventory",
            "logs": "/logs (WebSocket)",
            "health": "/health"
        }
    }


# ============================================================
# FRONTEND STATIC FILE SERVING
# ============================================================
# Dashboard build, mounted last as the catch-all route
frontend_path = os.path.join(os.path.dirname(__file__), "../frontend/build")

if os.path.exists(frontend_path):
    app.mount("/", StaticFiles(directory=frontend_path, html=True), name="frontend")
    print(f"[STARTUP] ✅ Frontend application mounted at {frontend_path}")
else:
    print(f"[STARTUP] ⚠️  Frontend application not found at {frontend_path}")
