import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Imports de l'application
from academy.api.api import api_router
from academy.content.catalog import AlgorithmCatalog, get_catalog
from academy.core.config import Settings, settings as default_settings
from academy.core.exceptions import AppException
from academy.db.session import Database

# --- Configuration du logging ---
logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder({"success": False, "error": error, **extra}))


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit %s exceeded by %s on %s", exc.detail, get_remote_address(request), request.url.path)
    return _error(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMIT_MESSAGE)


def _register_exception_handlers(app: FastAPI, config: Settings) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return _error(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", details=exc.errors())

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        if config.is_development:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error", message=str(exc))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(
                status.HTTP_404_NOT_FOUND,
                "Route not found",
                message=f"The requested endpoint {request.method} {request.url.path} does not exist",
            )
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if config.is_development:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!", message=str(exc))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")


def create_app(
    database: Optional[Database] = None,
    config: Optional[Settings] = None,
    catalog: Optional[AlgorithmCatalog] = None,
) -> FastAPI:
    """Build the API application.

    When ``database`` is given the caller owns it: the lifespan neither
    creates tables on it nor disposes it. Otherwise a handle is opened on
    ``DATABASE_URL`` at startup and closed on shutdown.
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = database is None
        db_handle = database or Database(
            config.DATABASE_URL,
            slow_query_threshold_ms=config.SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS,
        )
        if owned:
            db_handle.create_all()
            logger.info("Database tables ready (%s)", config.DATABASE_URL)
        app.state.database = db_handle
        logger.info("%s v%s started (environment=%s)", config.APP_NAME, config.VERSION, config.ENVIRONMENT)
        try:
            yield
        finally:
            if owned:
                db_handle.dispose()
            logger.info("%s stopped", config.APP_NAME)

    app = FastAPI(
        title=config.APP_NAME,
        version=config.VERSION,
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.catalog = catalog or get_catalog()
    if database is not None:
        app.state.database = database

    # --- Rate limiting (per client IP, shared by every /api route) ---
    limiter = Limiter(key_func=get_remote_address, key_style="endpoint", enabled=config.RATE_LIMIT_ENABLED)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @limiter.limit(config.RATE_LIMIT)
    def api_rate_limit(request: Request) -> None:
        return None

    # --- Security headers & compression ---
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(GZipMiddleware, minimum_size=config.GZIP_MINIMUM_SIZE)

    # --- CORS ---
    logger.info("CORS origins configured: %s", config.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, config)
    app.include_router(api_router, prefix="/api", dependencies=[Depends(api_rate_limit)])

    @app.get("/", include_in_schema=False)
    def read_root():
        return {"message": f"Welcome to the {config.APP_NAME} API", "docs": "/docs"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "academy.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
