from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookbrainz_api.api.deps import http_error
from bookbrainz_api.database import get_db
from bookbrainz_api.enums import EntityType
from bookbrainz_api.models.core import Entity
from bookbrainz_api.schemas import HealthDetailsResponse, HealthResponse
from bookbrainz_api.services.errors import StorageUnavailable, storage_errors

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/health/details", response_model=HealthDetailsResponse)
async def health_details(db: AsyncSession = Depends(get_db)) -> HealthDetailsResponse:
    try:
        with storage_errors("probing the database"):
            await db.execute(select(1))
            rows = (
                await db.execute(select(Entity.entity_type, func.count()).group_by(Entity.entity_type))
            ).all()
    except StorageUnavailable as exc:
        raise http_error(exc) from exc
    counts = {kind.value: 0 for kind in EntityType}
    counts.update({kind.value: int(total) for kind, total in rows})
    return HealthDetailsResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        database_ok=True,
        entity_counts=counts,
    )
