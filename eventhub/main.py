import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from eventhub.api.endpoints.auth import router as auth_router
from eventhub.api.endpoints.events import router as events_router
from eventhub.api.endpoints.lookups import router as lookups_router
from eventhub.core.config import Settings, get_settings
from eventhub.core.database import DatabaseSessionManager
from eventhub.core.exceptions import register_exception_handlers
from eventhub.core.ratelimit import build_limiter
from eventhub.utils.uploads.val_upload_event_file import EVENT_FILES_URL

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""
    session_manager: DatabaseSessionManager = app.state.session_manager

    try:
        logger.info("🚀 Starting EventHub application...")
        logger.info("🔌 Initializing database connection pool...")
        await session_manager.init()
        logger.info("✅ Database connection pool ready")
    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 EventHub application startup complete")
        yield
    finally:
        logger.info("🔌 Closing database connections...")
        await session_manager.close()
        logger.info("👋 Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings object and database handle."""
    settings = settings or get_settings()

    # interactive docs are only served outside production
    docs_enabled = settings.ENVIRONMENT != "production"

    app = FastAPI(
        title="EventHub API",
        description="OTP login and event management API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.session_manager = DatabaseSessionManager(
        settings.DATABASE_URL,
        models=settings.DB_MODELS,
        echo=settings.DB_ECHO,
    )

    app.state.limiter = build_limiter(settings)
    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health Check"])
    async def health_check(request: Request):
        try:
            await request.app.state.session_manager.ping()
            database = "connected"
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            database = "disconnected"
        return {
            "ok": database == "connected",
            "time": datetime.utcnow().isoformat() + "Z",
            "database": database,
        }

    app.include_router(auth_router, prefix="/api", tags=["Authentication"])
    app.include_router(events_router, prefix="/api", tags=["Events"])
    app.include_router(lookups_router, prefix="/api", tags=["Lookups"])

    os.makedirs(settings.EVENT_UPLOAD_DIR, exist_ok=True)
    app.mount(EVENT_FILES_URL, StaticFiles(directory=settings.EVENT_UPLOAD_DIR), name="event-files")

    logger.info(f"✅ Loaded {len(app.routes)} routes ({settings.ENVIRONMENT})")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("eventhub.main:app", host=settings.HOST, port=settings.PORT)
