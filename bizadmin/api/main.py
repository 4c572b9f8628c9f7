from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi import WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bizadmin.core.deps import close_data_service, get_data_service
from bizadmin.core.logging import configure_logging, correlation_id_var, screen_var
from bizadmin.core.settings import get_app_settings
from bizadmin.db.run_migrations import run_in_thread as run_alembic
from bizadmin.db.seed import seed_all
from bizadmin.db.session import dispose_engine
from bizadmin.schemas.common import ErrorInfo, ErrorResponse, MessageResponse
from bizadmin.services.data_service import DataService, DataServiceError
from bizadmin.services.editor_session import EditorSession
from bizadmin.services.entities import EDITORS
from bizadmin.services.list_editor import ListEditor
from bizadmin.services.viewport import ViewportObserver

# Routers
from bizadmin.api.routes.catalog import router as catalog_router
from bizadmin.api.routes.jobs import router as jobs_router
from bizadmin.api.routes.procurement import router as procurement_router

settings = get_app_settings()

# Configure structured logging once at import
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Close code sent when a client asks for an editor that does not exist.
WS_UNKNOWN_ENTITY = 4404

EDITOR_WS_ENDPOINTS: List[Dict[str, Any]] = [
    {
        "path": "/ws/editors/{entity}",
        "summary": "Live list-editor session for one screen.",
        "entities": sorted(EDITORS),
        "query": ["width?"],
        "messages": {
            "client_to_server": [
                "search {term}",
                "editor.open {code?}",
                "editor.close",
                "field.change {name, value}",
                "select.change {name, value}",
                "submit",
                "delete {code}",
                "viewport.resize {width}",
                "reload",
                "ping",
            ],
            "server_to_client": ["editor.view", "pong", "error"],
        },
        "close_codes": {str(WS_UNKNOWN_ENTITY): "Unknown entity"},
    },
]

openapi_tags = [
    {"name": "Health", "description": "Liveness and readiness checks."},
    {"name": "Jobs", "description": "Jobs and their search."},
    {"name": "Procurement", "description": "Purchase orders and their search."},
    {"name": "Catalog", "description": "Job categories, projects and contractors."},
    {
        "name": "WebSocket",
        "description": "WebSocket usage, endpoints, and connection details.",
    },
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    ts = datetime.now(tz=timezone.utc)
    corr = getattr(request.state, "correlation_id", None)
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=details),
        correlation_id=corr,
        path=request.url.path,
        method=request.method,
        timestamp=ts,
    )
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Global handler for HTTPException to produce a standardized error envelope.
    """
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type="http_error",
        message=str(detail),
        details=None if isinstance(exc.detail, str) else exc.detail,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global handler for request validation errors with a standard structure.
    """
    return _build_error_response(
        request=request,
        status_code=422,
        error_type="validation_error",
        message="Request validation failed",
        details=exc.errors(),
    )


@app.exception_handler(DataServiceError)
async def data_service_exception_handler(request: Request, exc: DataServiceError):
    """
    A backend call failed. Reported as a bad gateway; the backend message is
    included for diagnosis.
    """
    logger.error("Data service failure: %s", exc)
    return _build_error_response(
        request=request,
        status_code=502,
        error_type="data_service_error",
        message=f"Backend {exc.operation} failed",
        details={"table": exc.table, "reason": exc.message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing request")
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


@app.on_event("startup")
async def on_startup() -> None:
    """
    Run migrations and optional seeding on service startup.

    This ensures the database schema is up to date. Seeding is opt-in via settings.
    """
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            logger.info("Running Alembic migrations: upgrade head")
            await run_alembic(["upgrade", "head"])
            logger.info("Migrations completed.")
        except Exception as exc:
            logger.exception("Migration step failed: %s", exc)
            # Keep serving; the data service reports backend failures per call.

    if settings.AUTO_SEED:
        try:
            logger.info("Running database seeding...")
            await seed_all()
            logger.info("Seeding completed.")
        except Exception as exc:
            logger.exception("Seeding step failed: %s", exc)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """Release the data service and the database engine."""
    await close_data_service()
    await dispose_engine()


# Build API v1 router and include sub-routers
api_v1 = APIRouter(prefix="/api/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy", details={"data_backend": settings.DATA_BACKEND})


# PUBLIC_INTERFACE
@api_v1.get(
    "/websocket-info",
    response_model=Dict[str, Any],
    summary="WebSocket Usage Information",
    description="Connection details and message catalogue for the live list-editor sessions.",
    tags=["WebSocket"],
)
def websocket_info() -> Dict[str, Any]:
    """
    Describe how to connect to the editor WebSocket endpoints.

    Returns:
        JSON object with usage notes and the endpoints list describing query params and message types.
    """
    return {
        "usage": (
            "Open /ws/editors/{entity} with entity 'jobs' or 'purchases', optionally passing the client "
            "viewport width as ?width=. The server pushes an 'editor.view' envelope after connecting and after "
            "every accepted message. Message format is JSON with fields: "
            "{ type: string, payload: object, at: ISO-8601, channel?: string }."
        ),
        "view_modes": {
            "list": f"viewport width below {settings.VIEWPORT_BREAKPOINT_PX}px",
            "table": f"viewport width of {settings.VIEWPORT_BREAKPOINT_PX}px or more",
        },
        "endpoints": EDITOR_WS_ENDPOINTS,
        "notes": "WebSocket endpoints are not represented in OpenAPI schema; refer to this endpoint for usage.",
    }


# Include all routers under /api/v1
api_v1.include_router(jobs_router)
api_v1.include_router(procurement_router)
api_v1.include_router(catalog_router)

# Attach api_v1 to app
app.include_router(api_v1)


# PUBLIC_INTERFACE
@app.websocket("/ws/editors/{entity}")
async def ws_editor(
    websocket: WebSocket,
    entity: str,
    width: Optional[int] = Query(None, ge=0),
    service: DataService = Depends(get_data_service),
):
    """
    WebSocket endpoint for a live list-editor session.

    Path:
      - entity: 'jobs' or 'purchases'. Unknown entities are closed with code 4404.
    Query Parameters:
      - width: initial viewport width in pixels (defaults to DEFAULT_VIEWPORT_WIDTH)
    Messages:
      - Client -> Server: see /api/v1/websocket-info
      - Server -> Client: 'editor.view' after connect and after each accepted message,
        'pong' for 'ping', 'error' for malformed or unsupported messages.

    The editor lives as long as the connection; responses to requests still in
    flight at disconnect are discarded.
    """
    await websocket.accept()
    config = EDITORS.get(entity)
    if config is None:
        logger.warning("Rejecting editor session for unknown entity %r", entity)
        await websocket.close(code=WS_UNKNOWN_ENTITY)
        return

    token_corr = correlation_id_var.set(str(uuid4()))
    token_screen = screen_var.set(entity)
    try:
        viewport = ViewportObserver(
            settings.DEFAULT_VIEWPORT_WIDTH if width is None else width,
            settings.VIEWPORT_BREAKPOINT_PX,
        )
        editor = ListEditor(config, service, viewport)
        logger.info("Editor session opened (%s view)", viewport.view_mode)
        await EditorSession(websocket, editor, viewport).run()
    finally:
        screen_var.reset(token_screen)
        correlation_id_var.reset(token_corr)
