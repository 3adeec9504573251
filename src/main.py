"""FastAPI application entry point."""

import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import auth, comments, ideas, likes, roles, tags, users
from src.config import get_settings
from src.exceptions import ApiError

settings = get_settings()

logger = logging.getLogger(__name__)

SERVER_ERROR = {"status": 500, "msg": "Internal server error"}
VALIDATION_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    logger.info(f"Starting Idea Board API ({settings.environment})")
    yield


app = FastAPI(
    title="Idea Board API",
    description="Submit, tag, comment on and like ideas",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request on arrival and on completion."""
    start = time.perf_counter()
    logger.info(f"[{request.method}] {request.url.path}")
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"[{request.method}] {request.url.path} -> {response.status_code} ({duration_ms:.1f}ms)"
    )
    return response


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in VALIDATION_LOCATIONS:
            loc = loc[1:]
        errors.append(
            {
                "param": ".".join(loc),
                "msg": error.get("msg", ""),
                "value": error.get("input"),
            }
        )
    return errors


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    """Typed application errors carry their own status and message."""
    exc.log()
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.json(), headers=headers)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Declarative validation failures become 400 with per-field errors."""
    errors = _validation_errors(exc)
    logger.warning(f"Invalid request body on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"status": 400, "msg": "Invalid request body", "errors": errors}),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "msg": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """Anything else is logged in full and reported generically."""
    logger.exception(f"Unhandled error on [{request.method}] {request.url.path}")
    return JSONResponse(status_code=500, content=SERVER_ERROR)


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(roles.router)
app.include_router(tags.router)
app.include_router(ideas.router)
app.include_router(comments.router)
app.include_router(likes.router)


@app.get("/")
async def index():
    """Greeting endpoint."""
    return {"msg": "Hello world!"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
