"""Sources of entities related to an anchor.

Each source answers "which entities of kind K are associated with this
anchor" through one storage mechanism and yields RawCandidate values, so the
browse pipeline can treat them alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from bookbrainz_api.enums import AssociationSource, EdgeDirection, EntityType
from bookbrainz_api.models.core import Entity, EntityRelationship, edition_publishers
from bookbrainz_api.schemas import RelationshipEdge
from bookbrainz_api.services.errors import storage_errors
from bookbrainz_api.services.loader import BASIC_RELATIONS, eager_load


@dataclass(frozen=True)
class RawCandidate:
    entity: Entity
    source: AssociationSource
    edge: RelationshipEdge | None = None


class CandidateSource(ABC):
    tag: AssociationSource

    @abstractmethod
    async def resolve(self, db: AsyncSession, anchor: Entity, target_kind: EntityType) -> list[RawCandidate]:
        """Return the anchor's related entities of `target_kind`, eager-loaded with BASIC_RELATIONS."""


class GenericRelationshipSource(CandidateSource):
    """Typed relationship rows, matched with the anchor on either side."""

    tag = AssociationSource.generic

    async def resolve(self, db: AsyncSession, anchor: Entity, target_kind: EntityType) -> list[RawCandidate]:
        other = aliased(Entity)
        outgoing_stmt = (
            select(EntityRelationship)
            .join(other, EntityRelationship.target_bbid == other.bbid)
            .where(EntityRelationship.source_bbid == anchor.bbid, other.entity_type == target_kind)
            .options(
                selectinload(EntityRelationship.type),
                *eager_load(BASIC_RELATIONS, via=EntityRelationship.target),
            )
        )
        # A self-referencing row is already reported as outgoing.
        incoming_stmt = (
            select(EntityRelationship)
            .join(other, EntityRelationship.source_bbid == other.bbid)
            .where(
                EntityRelationship.target_bbid == anchor.bbid,
                EntityRelationship.source_bbid != anchor.bbid,
                other.entity_type == target_kind,
            )
            .options(
                selectinload(EntityRelationship.type),
                *eager_load(BASIC_RELATIONS, via=EntityRelationship.source),
            )
        )
        with storage_errors(f"resolving relationships of {anchor.bbid}"):
            outgoing = list(await db.scalars(outgoing_stmt))
            incoming = list(await db.scalars(incoming_stmt))

        rows = [(row, row.target, EdgeDirection.outgoing) for row in outgoing]
        rows += [(row, row.source, EdgeDirection.incoming) for row in incoming]
        rows.sort(key=lambda item: item[0].id)
        return [
            RawCandidate(
                entity=entity,
                source=self.tag,
                edge=RelationshipEdge(
                    relationship_type_id=row.type_id,
                    relationship_type=row.type.label,
                    direction=direction,
                ),
            )
            for row, entity, direction in rows
        ]


class _ForeignKeySource(CandidateSource):
    async def _fetch(self, db: AsyncSession, stmt, anchor: Entity) -> list[RawCandidate]:
        stmt = stmt.options(*eager_load(BASIC_RELATIONS)).order_by(Entity.bbid)
        with storage_errors(f"resolving {self.tag.value} associations of {anchor.bbid}"):
            entities = list(await db.scalars(stmt))
        return [RawCandidate(entity=entity, source=self.tag) for entity in entities]


class ContainmentSource(_ForeignKeySource):
    """Editions grouped under an EditionGroup through `edition_group_bbid`."""

    tag = AssociationSource.containment

    async def resolve(self, db: AsyncSession, anchor: Entity, target_kind: EntityType) -> list[RawCandidate]:
        if anchor.entity_type is EntityType.edition_group and target_kind is EntityType.edition:
            stmt = select(Entity).where(
                Entity.edition_group_bbid == anchor.bbid,
                Entity.entity_type == EntityType.edition,
            )
        elif anchor.entity_type is EntityType.edition and target_kind is EntityType.edition_group:
            if anchor.edition_group_bbid is None:
                return []
            stmt = select(Entity).where(
                Entity.bbid == anchor.edition_group_bbid,
                Entity.entity_type == EntityType.edition_group,
            )
        else:
            return []
        return await self._fetch(db, stmt, anchor)


class OwnershipSource(_ForeignKeySource):
    """Editions and the publishers that published them."""

    tag = AssociationSource.ownership

    async def resolve(self, db: AsyncSession, anchor: Entity, target_kind: EntityType) -> list[RawCandidate]:
        if anchor.entity_type is EntityType.publisher and target_kind is EntityType.edition:
            stmt = (
                select(Entity)
                .join(edition_publishers, edition_publishers.c.edition_bbid == Entity.bbid)
                .where(edition_publishers.c.publisher_bbid == anchor.bbid, Entity.entity_type == EntityType.edition)
            )
        elif anchor.entity_type is EntityType.edition and target_kind is EntityType.publisher:
            stmt = (
                select(Entity)
                .join(edition_publishers, edition_publishers.c.publisher_bbid == Entity.bbid)
                .where(edition_publishers.c.edition_bbid == anchor.bbid, Entity.entity_type == EntityType.publisher)
            )
        else:
            return []
        return await self._fetch(db, stmt, anchor)


GENERIC_SOURCE = GenericRelationshipSource()
CONTAINMENT_SOURCE = ContainmentSource()
OWNERSHIP_SOURCE = OwnershipSource()

# Associations stored as foreign keys instead of relationship rows.
SPECIAL_SOURCES: dict[tuple[EntityType, EntityType], tuple[CandidateSource, ...]] = {
    (EntityType.edition_group, EntityType.edition): (CONTAINMENT_SOURCE,),
    (EntityType.edition, EntityType.edition_group): (CONTAINMENT_SOURCE,),
    (EntityType.publisher, EntityType.edition): (OWNERSHIP_SOURCE,),
    (EntityType.edition, EntityType.publisher): (OWNERSHIP_SOURCE,),
}


def sources_for(anchor_kind: EntityType, target_kind: EntityType) -> tuple[CandidateSource, ...]:
    """Sources to query, in the order their results are reported."""
    return (GENERIC_SOURCE, *SPECIAL_SOURCES.get((anchor_kind, target_kind), ()))
