"""Clavision timetable API."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session

from app.catalog.service import load_seed_data
from app.core.config import settings
from app.core.database import create_db_and_tables, engine
from app.core.exceptions import (
    ClavisionError,
    InvalidSessionError,
    InvalidStateError,
    UpstreamFailureError,
)
from app.core.scheduler import shutdown_scheduler, start_scheduler
from app.routes import auth, catalog, files, timetable

# Configure logging
log_dir = Path.home() / ".logs" / "clavision"
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting Clavision API")
    create_db_and_tables()
    if settings.seed_data_path:
        with Session(engine) as session:
            load_seed_data(session, settings.seed_data_path)
    start_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()
    logger.info("Clavision API shut down")


app = FastAPI(
    title=settings.app_name,
    description="Class timetable API with LINE Login",
    version="0.1.0",
    lifespan=lifespan,
)

# Only the application itself calls the API from a browser
origins = (
    [o.strip() for o in settings.allowed_origins.split(",")]
    if settings.allowed_origins
    else [settings.app_url]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["authorization", "content-type"],
)

# Include routers
app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(timetable.router)
app.include_router(files.router)


@app.exception_handler(InvalidStateError)
async def invalid_state_handler(request: Request, exc: InvalidStateError):
    """Abort the login flow and send the user back to the application."""
    logger.warning(f"Login aborted: {exc.detail}")
    return RedirectResponse(settings.app_url)


@app.exception_handler(UpstreamFailureError)
async def upstream_failure_handler(request: Request, exc: UpstreamFailureError):
    logger.error(f"Upstream failure on {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": "Upstream service failed"})


@app.exception_handler(ClavisionError)
async def clavision_error_handler(request: Request, exc: ClavisionError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidSessionError) else None
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=headers
    )


@app.get("/")
async def root():
    """Redirect root to the application."""
    return RedirectResponse(settings.app_url)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
