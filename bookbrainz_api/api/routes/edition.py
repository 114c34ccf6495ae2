from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bookbrainz_api.api.deps import http_error
from bookbrainz_api.database import get_db, get_session_factory
from bookbrainz_api.enums import EntityType
from bookbrainz_api.schemas import (
    AliasesResponse,
    BrowseEditionsResponse,
    EntityProjection,
    IdentifiersResponse,
    RelationshipsResponse,
)
from bookbrainz_api.services.browse import browse_related, parse_browse_query
from bookbrainz_api.services.errors import LookupFailure
from bookbrainz_api.services.loader import (
    ALIAS_RELATIONS,
    BASIC_RELATIONS,
    IDENTIFIER_RELATIONS,
    RELATIONSHIP_RELATIONS,
    load_entity,
)
from bookbrainz_api.services.projection import (
    list_aliases,
    list_identifiers,
    list_relationships,
    project_basic_info,
)

router = APIRouter(prefix="/edition", tags=["edition"])

EDITION_NOT_FOUND = "Edition not found"


async def _load_edition(db: AsyncSession, bbid: str, relations: tuple[str, ...]):
    try:
        return await load_entity(
            db, bbid, kind=EntityType.edition, relations=relations, not_found_message=EDITION_NOT_FOUND
        )
    except LookupFailure as exc:
        raise http_error(exc) from exc


@router.get("", response_model=BrowseEditionsResponse)
async def browse_editions(
    author: str | None = Query(default=None),
    edition: str | None = Query(default=None),
    edition_group: str | None = Query(default=None, alias="edition-group"),
    publisher: str | None = Query(default=None),
    work: str | None = Query(default=None),
    format: str | None = Query(default=None),
    language: str | None = Query(default=None),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BrowseEditionsResponse:
    params = {
        "author": author,
        "edition": edition,
        "edition-group": edition_group,
        "publisher": publisher,
        "work": work,
        "format": format,
        "language": language,
    }
    try:
        criteria = parse_browse_query(params, target_kind=EntityType.edition)
        result = await browse_related(session_factory, criteria)
    except LookupFailure as exc:
        raise http_error(exc) from exc
    return BrowseEditionsResponse(anchor_id=result.anchor_id, editions=result.records)


@router.get("/{bbid}", response_model=EntityProjection)
async def get_edition(bbid: str, db: AsyncSession = Depends(get_db)) -> EntityProjection:
    edition = await _load_edition(db, bbid, BASIC_RELATIONS)
    return project_basic_info(edition)


@router.get("/{bbid}/aliases", response_model=AliasesResponse)
async def get_edition_aliases(bbid: str, db: AsyncSession = Depends(get_db)) -> AliasesResponse:
    edition = await _load_edition(db, bbid, ALIAS_RELATIONS)
    return list_aliases(edition)


@router.get("/{bbid}/identifiers", response_model=IdentifiersResponse)
async def get_edition_identifiers(bbid: str, db: AsyncSession = Depends(get_db)) -> IdentifiersResponse:
    edition = await _load_edition(db, bbid, IDENTIFIER_RELATIONS)
    return list_identifiers(edition)


@router.get("/{bbid}/relationships", response_model=RelationshipsResponse)
async def get_edition_relationships(bbid: str, db: AsyncSession = Depends(get_db)) -> RelationshipsResponse:
    edition = await _load_edition(db, bbid, RELATIONSHIP_RELATIONS)
    return list_relationships(edition)
