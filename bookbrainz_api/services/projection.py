from bookbrainz_api.enums import EdgeDirection
from bookbrainz_api.models.core import Alias, Entity, EntityRelationship
from bookbrainz_api.schemas import (
    AliasesResponse,
    AliasOut,
    EntityProjection,
    EntityRef,
    IdentifierOut,
    IdentifiersResponse,
    RelationshipOut,
    RelationshipsResponse,
)


def _alias_out(alias: Alias | None) -> AliasOut | None:
    if alias is None:
        return None
    return AliasOut(
        name=alias.name,
        sort_name=alias.sort_name,
        language=alias.language.name if alias.language else None,
        primary=alias.primary,
    )


def _distinct_languages(entity: Entity) -> list[str]:
    names: list[str] = []
    for link in entity.language_links:
        if link.language.name not in names:
            names.append(link.language.name)
    return names


def _release_date(entity: Entity) -> str | None:
    dates = sorted(event.date for event in entity.release_events if event.date)
    return dates[0] if dates else None


def project_basic_info(entity: Entity) -> EntityProjection:
    """Project an entity loaded with BASIC_RELATIONS onto its public fields."""
    return EntityProjection(
        bbid=entity.bbid,
        entity_type=entity.entity_type,
        default_alias=_alias_out(entity.default_alias),
        disambiguation=entity.disambiguation,
        edition_format=entity.edition_format.label if entity.edition_format else None,
        status=entity.edition_status.label if entity.edition_status else None,
        languages=_distinct_languages(entity),
        height=entity.height,
        width=entity.width,
        depth=entity.depth,
        weight=entity.weight,
        pages=entity.pages,
        release_date=_release_date(entity),
    )


def list_aliases(entity: Entity) -> AliasesResponse:
    return AliasesResponse(
        bbid=entity.bbid,
        default_alias=_alias_out(entity.default_alias),
        aliases=[_alias_out(alias) for alias in entity.aliases],
    )


def list_identifiers(entity: Entity) -> IdentifiersResponse:
    return IdentifiersResponse(
        bbid=entity.bbid,
        identifiers=[
            IdentifierOut(type_id=identifier.type_id, type=identifier.type.label, value=identifier.value)
            for identifier in entity.identifiers
        ],
    )


def _entity_ref(entity: Entity) -> EntityRef:
    return EntityRef(
        bbid=entity.bbid,
        entity_type=entity.entity_type,
        default_alias_name=entity.default_alias.name if entity.default_alias else None,
    )


def _relationship_out(entity: Entity, row: EntityRelationship, direction: EdgeDirection) -> RelationshipOut:
    # Only the far endpoint is eager-loaded; the near one is `entity` itself.
    if direction is EdgeDirection.outgoing:
        source, target, phrase = entity, row.target, row.type.link_phrase
    else:
        source, target, phrase = row.source, entity, row.type.reverse_link_phrase
    return RelationshipOut(
        id=row.id,
        relationship_type_id=row.type_id,
        relationship_type=row.type.label,
        direction=direction,
        link_phrase=phrase,
        source=_entity_ref(source),
        target=_entity_ref(target),
    )


def list_relationships(entity: Entity) -> RelationshipsResponse:
    """List every relationship of an entity loaded with RELATIONSHIP_RELATIONS, by id."""
    rows = [(row, EdgeDirection.outgoing) for row in entity.outgoing_relationships]
    rows += [
        (row, EdgeDirection.incoming)
        for row in entity.incoming_relationships
        if row.source_bbid != entity.bbid
    ]
    rows.sort(key=lambda item: item[0].id)
    return RelationshipsResponse(
        bbid=entity.bbid,
        relationships=[_relationship_out(entity, row, direction) for row, direction in rows],
    )
