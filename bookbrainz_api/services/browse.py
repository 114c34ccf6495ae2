from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bookbrainz_api.enums import BROWSE_QUERY_KEYS, EntityType
from bookbrainz_api.models.core import Entity
from bookbrainz_api.schemas import BrowseRecord, EmptyRelationship
from bookbrainz_api.services.associations import CandidateSource, RawCandidate, sources_for
from bookbrainz_api.services.errors import EntityNotFound
from bookbrainz_api.services.filters import build_predicate
from bookbrainz_api.services.loader import load_entity
from bookbrainz_api.services.projection import project_basic_info
from bookbrainz_api.services.validation import single_anchor_key, validate_bbid

logger = logging.getLogger(__name__)

ANCHOR_NOT_FOUND = "Entity not found"


@dataclass(frozen=True)
class QueryCriteria:
    anchor_id: str
    anchor_kind: EntityType
    target_kind: EntityType
    format: str | None = None
    language: str | None = None


@dataclass
class BrowseResult:
    anchor_id: str
    records: list[BrowseRecord] = field(default_factory=list)


def parse_browse_query(
    params: Mapping[str, str | None],
    *,
    target_kind: EntityType,
    allowed_keys: Mapping[str, EntityType] = BROWSE_QUERY_KEYS,
) -> QueryCriteria:
    """Build criteria from query parameters.

    Exactly one anchor key must be present and carry a well-formed BBID.
    """
    key, anchor_kind = single_anchor_key(params, allowed_keys)
    anchor_id = params[key]
    validate_bbid(anchor_id)
    return QueryCriteria(
        anchor_id=anchor_id,
        anchor_kind=anchor_kind,
        target_kind=target_kind,
        format=params.get("format"),
        language=params.get("language"),
    )


async def _resolve(
    session_factory: async_sessionmaker[AsyncSession],
    source: CandidateSource,
    anchor: Entity,
    target_kind: EntityType,
) -> list[RawCandidate]:
    async with session_factory() as db:
        return await source.resolve(db, anchor, target_kind)


async def browse_related(
    session_factory: async_sessionmaker[AsyncSession],
    criteria: QueryCriteria,
) -> BrowseResult:
    async with session_factory() as db:
        anchor = await load_entity(db, criteria.anchor_id, relations=(), not_found_message=ANCHOR_NOT_FOUND)
    if anchor.entity_type is not criteria.anchor_kind:
        logger.debug(
            "Anchor %s is a %s, not a %s", anchor.bbid, anchor.entity_type.value, criteria.anchor_kind.value
        )
        raise EntityNotFound(ANCHOR_NOT_FOUND)

    sources = sources_for(anchor.entity_type, criteria.target_kind)
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(_resolve(session_factory, source, anchor, criteria.target_kind))
                for source in sources
            ]
    except ExceptionGroup as failures:
        # The first failing source cancels the rest; surface its error unwrapped.
        raise failures.exceptions[0]
    batches = [task.result() for task in tasks]

    predicate = build_predicate(format=criteria.format, language=criteria.language)
    result = BrowseResult(anchor_id=criteria.anchor_id)
    candidate_count = 0
    for candidates in batches:
        for candidate in candidates:
            candidate_count += 1
            projection = project_basic_info(candidate.entity)
            if not predicate(projection):
                continue
            result.records.append(
                BrowseRecord(
                    entity=projection,
                    relationship=candidate.edge if candidate.edge is not None else EmptyRelationship(),
                )
            )
    logger.info(
        "Browsed %s from %s %s: %d of %d candidates kept (%s)",
        criteria.target_kind.value,
        anchor.entity_type.value,
        anchor.bbid,
        len(result.records),
        candidate_count,
        ", ".join(source.tag.value for source in sources),
    )
    return result
