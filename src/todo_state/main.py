import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .errors import IdConflictError, ProviderMissingError, UnhandledActionError
from .provider import TodoProvider
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, toggle and remove Todo items held in the in-memory store.",
    },
]


def _build_provider(settings: Settings) -> TodoProvider:
    if settings.seed == "empty":
        return TodoProvider(initial=())
    return TodoProvider()


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI host for the todo store.

    The TodoProvider scope spans the application lifespan: it is entered on
    startup and closed on shutdown. Requests handled outside that window get
    a 503 ProviderMissing response.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    provider = _build_provider(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        with provider:
            yield

    app = FastAPI(
        title="Todo State",
        description="In-memory todo list store with create, toggle and remove commands.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.todo_provider = provider

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(ValidationError)
    async def action_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Same shape as request validation errors, for malformed dispatched commands."""
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Action validation failed",
                "detail": jsonable_encoder(exc.errors(include_url=False, include_context=False)),
            },
        )

    @app.exception_handler(UnhandledActionError)
    async def unhandled_action_handler(request: Request, exc: UnhandledActionError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "UnhandledAction",
                "message": str(exc),
                "action_type": exc.action_type,
            },
        )

    @app.exception_handler(IdConflictError)
    async def id_conflict_handler(request: Request, exc: IdConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "error": "IdConflict",
                "message": str(exc),
                "todo_id": exc.todo_id,
            },
        )

    @app.exception_handler(ProviderMissingError)
    async def provider_missing_handler(request: Request, exc: ProviderMissingError) -> JSONResponse:
        logger.error("Request %s served without an active TodoProvider", request.url.path)
        return JSONResponse(
            status_code=503,
            content={"error": "ProviderMissing", "message": str(exc)},
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of todos.
        """
        items = len(provider.get_state()) if provider.active else 0
        return {"message": "Healthy", "active": provider.active, "items": items}

    # Include routers
    app.include_router(todos_router.router)
    return app


# Module-level app for `uvicorn todo_state.main:app`
app = create_app()
