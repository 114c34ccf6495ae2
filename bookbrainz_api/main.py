import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from sqlalchemy import text

from bookbrainz_api.api.routes import edition, health
from bookbrainz_api.config import Settings, get_settings
from bookbrainz_api.database import engine
from bookbrainz_api.models.base import Base

SERVICE_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    configure_logging(settings)
    async with engine.begin() as connection:
        if settings.auto_create_schema:
            await connection.run_sync(Base.metadata.create_all)
        await connection.execute(text("SELECT 1"))
    logger.info("%s %s ready", settings.service_name, SERVICE_VERSION)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="BookBrainz Edition API",
        version=SERVICE_VERSION,
        description="Read-only lookup and browse endpoints for BookBrainz editions.",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(edition.router)

    @app.get("/meta")
    def meta() -> dict:
        settings = get_settings()
        return {
            "service": settings.service_name,
            "version": SERVICE_VERSION,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app


app = create_app()
