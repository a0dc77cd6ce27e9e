"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi import __version__
from taskapi.config import Settings, load_settings
from taskapi.errors import StorageError
from taskapi.models import (
    ClearCompletedResponse,
    ErrorResponse,
    HealthResponse,
    Task,
    TaskCreate,
)
from taskapi.store import TaskStore

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
TEXT_REQUIRED = "Task text is required"
STORAGE_UNAVAILABLE = "Storage unavailable"

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_store(request: Request) -> TaskStore:
    """Return the store attached to the running application."""
    return request.app.state.store


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map a bad path id to 404 and any bad request body to 400."""
    if any(err["loc"] and err["loc"][0] == "path" for err in exc.errors()):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": TASK_NOT_FOUND})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": TEXT_REQUIRED})


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Report storage failures as 500."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": STORAGE_UNAVAILABLE},
    )


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application for ``settings`` (read from the environment if omitted)."""
    settings = settings or load_settings()
    store = store or TaskStore(settings.tasks_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store.initialize()
        logger.info("Task list ready, storing tasks in %s", store.path)
        yield

    app = FastAPI(
        title="Task List API",
        description="A minimal task list persisted to a JSON file.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(version=__version__)

    @app.get(
        "/api/tasks",
        response_model=list[Task],
        responses={500: {"model": ErrorResponse}},
        tags=["Tasks"],
    )
    def list_tasks(store: TaskStore = Depends(get_store)) -> list[Task]:
        """List all tasks in creation order."""
        return store.read_all()

    @app.post(
        "/api/tasks",
        response_model=Task,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Tasks"],
    )
    def create_task(data: TaskCreate, store: TaskStore = Depends(get_store)) -> Task:
        """Create a new task."""
        return store.create(data.text)

    @app.delete(
        "/api/tasks/completed",
        response_model=ClearCompletedResponse,
        responses={500: {"model": ErrorResponse}},
        tags=["Tasks"],
    )
    def clear_completed(store: TaskStore = Depends(get_store)) -> ClearCompletedResponse:
        """Delete every completed task."""
        return ClearCompletedResponse(deleted=store.clear_completed())

    @app.put(
        "/api/tasks/{task_id}",
        response_model=Task,
        responses=NOT_FOUND_RESPONSES,
        tags=["Tasks"],
    )
    def toggle_task(task_id: int, store: TaskStore = Depends(get_store)) -> Task:
        """Flip a task between completed and not completed."""
        task = store.toggle(task_id)
        if task is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=TASK_NOT_FOUND,
            )
        return task

    @app.delete(
        "/api/tasks/{task_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=NOT_FOUND_RESPONSES,
        tags=["Tasks"],
    )
    def delete_task(task_id: int, store: TaskStore = Depends(get_store)) -> None:
        """Delete a task."""
        if not store.delete(task_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=TASK_NOT_FOUND,
            )

    # Mounted last so the API routes above take precedence.
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        logger.debug("Serving static client from %s", settings.static_dir)

    return app


app = create_app()
