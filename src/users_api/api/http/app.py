"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.users_api import __version__
from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.api.http.deps import get_app_dependencies
from src.users_api.api.http.errors import INTERNAL_ERROR_MESSAGE, register_exception_handlers
from src.users_api.api.http.routers.health import router as health_router
from src.users_api.api.http.routers.users import router as users_router
from src.users_api.api.utils.app_startup import configure_logging
from src.users_api.core.services import DbManageService, DbSessionService
from src.users_api.runtime.config.config_data import ConfigData
from src.users_api.runtime.context import get_config


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

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
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            # Anything the exception handlers did not translate.
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"message": INTERNAL_ERROR_MESSAGE, "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for ``config`` (the active configuration by default)."""
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database_service = DbSessionService(config.database)
        if config.database.create_tables:
            DbManageService(database_service.engine).create_all()

        app.state.app_dependencies = ApplicationDependencies(
            config=config,
            database_service=database_service,
            started_at=time.monotonic(),
        )
        logger.info("Starting up application in {} environment", config.app.environment)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            database_service.dispose()

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Users API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(users_router)

    @app.get("/", tags=["meta"])
    def index(
        app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    ) -> dict[str, object]:
        """Service banner with uptime in seconds."""
        return {
            "message": f"{config.app.name} {__version__}",
            "uptime": round(time.monotonic() - app_deps.started_at, 3),
        }

    return app


app = create_app()

__all__ = ["app", "create_app"]


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # request logging is done by the middleware
    )
