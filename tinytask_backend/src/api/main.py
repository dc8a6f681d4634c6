from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import InvalidTaskError, TaskNotFoundError
from .logging_setup import setup_logging
from .repositories import InMemoryRepository
from .routers import todos as todos_router
from .service import TaskService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, read, toggle and delete in-memory Todo items.",
    },
]


def _error(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _first_validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Pick a client-facing message from pydantic/fastapi error details.

    Messages raised by our own validators are returned verbatim; a missing
    body or title reads as "Title is required".
    """
    for err in errors:
        ctx = err.get("ctx") or {}
        cause = ctx.get("error")
        if isinstance(cause, ValueError):
            return str(cause)
        if err.get("type") == "missing":
            return "Title is required"
        msg = str(err.get("msg") or "")
        if msg.startswith("Value error, "):
            return msg[len("Value error, "):]
        if msg:
            return msg
    return "Title is required"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        return _error(404, exc.message)

    @app.exception_handler(InvalidTaskError)
    async def invalid_task_handler(request: Request, exc: InvalidTaskError) -> JSONResponse:
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return request validation errors as a 400 with a single message:
            {"error": "Title must be at least 3 characters"}
        """
        return _error(400, _first_validation_message(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application together with its repository and service.

    The repository is created here, once per application, and lives on
    app.state for the lifetime of the process.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="TinyTask Backend",
        description="Backend API service for managing todos held in memory.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )

    repository = InMemoryRepository()
    app.state.settings = settings
    app.state.repository = repository
    app.state.task_service = TaskService(repository)

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    origins: List[str] = settings.cors_allow_origins
    allow_all = (origins == ["*"]) or (len(origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request) -> Dict[str, Any]:
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of stored todos.
        """
        return {"message": "Healthy", "todos": request.app.state.repository.count()}

    app.include_router(todos_router.router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn using host/port/log level from settings."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting TinyTask backend on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
