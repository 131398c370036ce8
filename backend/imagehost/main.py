"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from imagehost.config import Settings, settings as default_settings
from imagehost.database import build_engine, build_sessionmaker
from imagehost.errors import ConnectivityError, ImageHostError
from imagehost.middleware import CorsMiddleware, RecoveryMiddleware
from imagehost.models import Base
from imagehost.routes.files import legacy_router, router as files_router
from imagehost.routes.pages import router as pages_router
from imagehost.services.file_storage import FileStorageService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the metadata store and create tables. Failure here aborts startup."""
    engine = app.state.engine
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        await engine.dispose()
        raise ConnectivityError(f"Cannot open metadata store: {e}") from e
    logger.info("Metadata store ready")

    yield

    # Cleanup
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Image Application API",
        version="1.0.0",
        description="Upload images and list stored file metadata.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.async_session = build_sessionmaker(app.state.engine)
    app.state.file_storage = FileStorageService(settings.FILE_STORAGE_PATH)
    app.state.templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

    # Last added runs first: CORS wraps recovery so 500s carry CORS headers too
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(CorsMiddleware)

    @app.exception_handler(ImageHostError)
    async def image_host_error_handler(request: Request, exc: ImageHostError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
        else:
            logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
        return PlainTextResponse(exc.public_message, status_code=exc.status_code)

    @app.get("/api/health")
    async def health_check(request: Request):
        """Verify API and database connectivity."""
        try:
            async with request.app.state.async_session() as db:
                await db.execute(text("SELECT 1"))
                return {"status": "ok", "database": "connected"}
        except Exception:
            logger.exception("Health check could not reach the metadata store")
            return {"status": "error", "database": "unavailable"}

    app.include_router(files_router)
    app.include_router(legacy_router)
    app.include_router(pages_router)
    app.mount(
        settings.STATIC_URL_PATH,
        StaticFiles(directory=str(app.state.file_storage.base_path)),
        name="static",
    )

    return app
