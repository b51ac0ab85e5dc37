"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Logging initialization
2. Router registration
3. Middleware configuration (audit logging, CORS)
4. Exception handlers mapping pipeline errors to status codes

Run with: uvicorn filecontext.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filecontext import __version__
from filecontext.api.routes import files_router, health_router, query_router
from filecontext.core.audit import AuditMiddleware
from filecontext.core.config import get_settings
from filecontext.core.exceptions import FileContextException, ValidationError
from filecontext.core.logging_config import get_logger, setup_logging


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup and shutdown."""
    logger.info(f"Starting {settings.app_name} {__version__} in {settings.app_env} mode")
    logger.info(f"Ollama: {settings.ollama_base_url} model={settings.ollama_model}")
    logger.info(
        f"Together: model={settings.together_model} "
        f"api_key={'set' if settings.together_api_key else 'missing'}"
    )
    logger.info(f"Context limit: {settings.max_context_length} chars")

    yield

    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title="File Context API",
    description="""
    API for managing files and querying LLMs with file context.

    ## Features

    - **File context queries**: Ask Ollama or Together AI about a file or directory
    - **Bounded context**: Text files are concatenated and truncated to a fixed budget
    - **Storage area**: Upload and delete text files to query later
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration
# ============================================================

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(FileContextException)
async def file_context_exception_handler(request: Request, exc: FileContextException):
    """Map pipeline errors to their status code and error body."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} at stage={exc.stage}: {exc.message}")
    else:
        logger.warning(f"{exc.error_code} at stage={exc.stage}: {exc.message}")

    content = exc.to_dict()
    content["timestamp"] = datetime.utcnow().isoformat()
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report body/query parsing failures in the same shape as ValidationError."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc is ("body" | "query" | "path", <field>, ...)
    location = [str(part) for part in first.get("loc", ())[1:]]
    field = location[-1] if location else None

    error = ValidationError(first.get("msg", "Invalid request"), field=field)
    return await file_context_exception_handler(request, error)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "stage": "internal",
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(query_router)
app.include_router(files_router)


@app.get("/", include_in_schema=False)
async def root():
    """Point clients at the API documentation."""
    return {
        "message": "File Context API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "filecontext.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development()
    )
