from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from lab_access import __version__
from lab_access.api import screens
from lab_access.api.v1 import auth, profiles, requests
from lab_access.core.config import settings
from lab_access.core.database import get_db_client, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

class HealthCheckLogFilter(logging.Filter):
    """Drop uvicorn access log lines for health probes, keep everything else"""
    def filter(self, record):
        return "/health" not in record.getMessage()

logging.getLogger("uvicorn.access").addFilter(HealthCheckLogFilter())

app = FastAPI(
    title="Lab Access API",
    description="AI Robotics Lab access request and approval service",
    version=__version__,
)

# CORS middleware - MUST be added before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    """Create tables on startup"""
    client = get_db_client()
    if not client.is_connected:
        logger.error("[STARTUP] Database unavailable - API calls will return 503")
        return
    init_db()
    logger.info("[STARTUP] Database ready (%s)", client.url.get_backend_name())

@app.on_event("shutdown")
async def shutdown_event():
    get_db_client().disconnect()

@app.get("/health")
async def health():
    return {"status": "ok", "database": get_db_client().health_check()}

app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(profiles.router, prefix="/api/v1/profiles", tags=["profiles"])
app.include_router(requests.router, prefix="/api/v1/requests", tags=["requests"])
app.include_router(screens.router, tags=["screens"])
