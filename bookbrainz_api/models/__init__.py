from bookbrainz_api.models.core import (
    Alias,
    EditionFormat,
    EditionStatus,
    Entity,
    EntityLanguage,
    EntityRelationship,
    Identifier,
    IdentifierType,
    Language,
    RelationshipType,
    ReleaseEvent,
    edition_publishers,
)

__all__ = [
    "Alias",
    "EditionFormat",
    "EditionStatus",
    "Entity",
    "EntityLanguage",
    "EntityRelationship",
    "Identifier",
    "IdentifierType",
    "Language",
    "RelationshipType",
    "ReleaseEvent",
    "edition_publishers",
]
