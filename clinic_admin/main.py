from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

# Load environment variables as early as possible
load_dotenv()

from .config import settings, DEFAULT_ADMIN_PASSWORD
from .database import create_db_and_tables, engine
from .dependencies import get_token_service
from .application.services.auth_service import AuthService
from .infrastructure.persistence.sqlalchemy.repositories.admin_repository_sql import SqlAdminRepository
from .middleware import SecurityMiddleware, LoggingMiddleware, ErrorHandlingMiddleware, RequestSizeLimitMiddleware
from .exceptions import http_exception_handler, validation_exception_handler
from .schemas.common.common import HealthResponse
from .routers import (
    auth_router,
    patients_router,
    appointments_router,
    medications_router,
    fingerprints_router,
)

logger = logging.getLogger(__name__)


def bootstrap_admin() -> None:
    """Make sure the administrator account exists."""
    if settings.ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is the built-in default; set it in the environment")
    with Session(engine) as session:
        auth = AuthService(admin_repo=SqlAdminRepository(session), tokens=get_token_service())
        auth.ensure_default_admin(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    # fail fast on a missing signing secret
    get_token_service()
    app.state.db_init_ok = True
    app.state.db_init_error = None
    try:
        create_db_and_tables()
        bootstrap_admin()
        logger.info("Database initialized successfully")
    except Exception as e:
        # Do not crash the app; report via health endpoint
        app.state.db_init_ok = False
        app.state.db_init_error = str(e)
        logger.exception("Database initialization failed")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

# Exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Add middleware
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)

# GZip compression
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)

# CORS: explicit origins only
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.allowed_methods_list,
    allow_headers=settings.allowed_headers_list,
)

app.include_router(auth_router.router)
app.include_router(patients_router.router)
app.include_router(appointments_router.router)
app.include_router(medications_router.router)
app.include_router(fingerprints_router.router)


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy" if getattr(app.state, "db_init_ok", True) else "degraded",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clinic_admin.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
