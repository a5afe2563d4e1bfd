import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import health, tags, tasks
from .config import Settings, get_settings
from .crud import TagStorage, TaskStorage
from .database import create_db_and_tables, get_engine
from .errors import NotFoundError, TaskboardError, ValidationError
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body and path validation failures are client errors, reported as 400
    if any("title" in err.get("loc", ()) for err in exc.errors()):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid title")
    return _error(status.HTTP_400_BAD_REQUEST, ValidationError.public_message)


async def handle_taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
    if isinstance(exc, (ValidationError, NotFoundError)):
        return _error(exc.status_code, exc.message)
    logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} crashed: {exc!r}", exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the store is created on startup and disposed on shutdown."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = get_engine(settings.database_url, echo=settings.sql_echo)
        create_db_and_tables(engine)
        app.state.engine = engine
        app.state.tag_storage = TagStorage(engine)
        app.state.task_storage = TaskStorage(engine, app.state.tag_storage)
        logger.info(f"Database ready at {engine.url!r}")
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(
        title="Taskboard API",
        description="Tasks and tags backed by a relational store",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(TaskboardError, handle_taskboard_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Mount routers
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
    app.include_router(health.router, tags=["health"])

    @app.get("/")
    async def read_root():
        return {"message": "Welcome to the Taskboard Backend!"}

    return app


setup_logging(get_settings().log_level)
app = create_app()
