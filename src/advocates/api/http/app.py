"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from src.advocates.api.http.app_data import ApplicationDependencies
from src.advocates.api.http.error_handlers import error_response, register_exception_handlers
from src.advocates.api.http.routers import advocates, health, seed
from src.advocates.api.utils.app_startup import configure_logging
from src.advocates.core.services import DbManageService, DbSessionService
from src.advocates.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            # Anything the route-level handlers did not classify
            response = error_response(exc, request_id)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")

        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    if getattr(app.state, "app_dependencies", None) is None:
        database_service = DbSessionService()
        app.state.app_dependencies = ApplicationDependencies.from_database(
            database_service
        )
        app.state.owns_database = True

    if config.database.create_tables_on_startup:
        DbManageService(app.state.app_dependencies.database_service).create_all()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    if getattr(app.state, "owns_database", False):
        app.state.app_dependencies.database_service.dispose()


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the FastAPI application.

    ``dependencies`` are normally created on startup from configuration;
    tests pass them in to run against their own database.
    """
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app)
        try:
            yield
        finally:
            await shutdown(app)

    is_production = config.app.environment == "production"
    application = FastAPI(
        title="Advocates API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    application.state.app_dependencies = dependencies

    application.add_middleware(SecurityHeadersMiddleware)

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(log_requests)

    register_exception_handlers(application)

    # --- Router registration ---
    application.include_router(health.router)
    application.include_router(advocates.router, prefix=config.api.prefix)
    application.include_router(seed.router, prefix=config.api.prefix)

    return application


# Initialize logging
configure_logging()

app = create_app()

# expose startup for tests
__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
