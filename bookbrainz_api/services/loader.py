from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import InstrumentedAttribute
from sqlalchemy.sql.base import ExecutableOption

from bookbrainz_api.enums import EntityType
from bookbrainz_api.models.core import Entity
from bookbrainz_api.services.errors import EntityNotFound, storage_errors
from bookbrainz_api.services.validation import validate_bbid

logger = logging.getLogger(__name__)

# Relation paths are dotted attribute chains starting at Entity.
BASIC_RELATIONS: tuple[str, ...] = (
    "default_alias.language",
    "language_links.language",
    "edition_format",
    "edition_status",
    "release_events",
)
ALIAS_RELATIONS: tuple[str, ...] = ("default_alias.language", "aliases.language")
IDENTIFIER_RELATIONS: tuple[str, ...] = ("identifiers.type",)
RELATIONSHIP_RELATIONS: tuple[str, ...] = (
    "default_alias",
    "outgoing_relationships.type",
    "outgoing_relationships.target.default_alias",
    "incoming_relationships.type",
    "incoming_relationships.source.default_alias",
)


def eager_load(relations: Sequence[str], *, via: InstrumentedAttribute | None = None) -> list[ExecutableOption]:
    """Build selectinload options for relation paths, optionally below `via`."""
    options: list[ExecutableOption] = []
    for path in relations:
        option = selectinload(via) if via is not None else None
        owner = via.property.mapper.class_ if via is not None else Entity
        for name in path.split("."):
            attribute = getattr(owner, name)
            option = selectinload(attribute) if option is None else option.selectinload(attribute)
            owner = attribute.property.mapper.class_
        options.append(option)
    return options


async def load_entity(
    db: AsyncSession,
    bbid: str,
    *,
    kind: EntityType | None = None,
    relations: Sequence[str] = BASIC_RELATIONS,
    not_found_message: str = "Entity not found",
) -> Entity:
    """Load one entity with a fixed eager-load set.

    The id is validated before any query is issued. When `kind` is None the
    stored entity type is used as is; otherwise a row of another type counts
    as missing.
    """
    normalized = validate_bbid(bbid)
    stmt = select(Entity).where(Entity.bbid == normalized).options(*eager_load(relations))
    if kind is not None:
        stmt = stmt.where(Entity.entity_type == kind)
    with storage_errors(f"loading entity {normalized}"):
        entity = await db.scalar(stmt)
    if entity is None:
        logger.debug("No %s found for bbid %s", kind.value if kind else "entity", normalized)
        raise EntityNotFound(not_found_message)
    return entity
