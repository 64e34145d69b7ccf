"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dc_agent.api.routes import capabilities, configuration, health, metrics
from dc_agent.core.config import get_settings
from dc_agent.core.logging_config import LoggingConfig
from dc_agent.core.middleware import LoggingContextMiddleware
from dc_agent.core.middleware_metrics import MetricsMiddleware
from dc_agent.core.source_config import ConfigDecodeError

LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="Data connector agent with per-request configuration",
    version="0.1.0",
    lifespan=lifespan,
)

# Last added runs first: CORS -> logging context -> metrics
app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigDecodeError)
async def config_decode_exception_handler(request: Request, exc: ConfigDecodeError):
    """Malformed configuration header is the caller's error"""
    logger.warning(
        "Bad configuration header",
        extra={
            "error": exc.reason,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": exc.reason,
            "type": type(exc).__name__,
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all unhandled errors"""
    if isinstance(exc, FastAPIHTTPException):
        raise exc

    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc),
            "type": type(exc).__name__,
        }
    )


app.include_router(capabilities.router)
app.include_router(configuration.router)
app.include_router(health.router)
app.include_router(metrics.router)


@app.get("/")
async def root():
    """Root endpoint"""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }
