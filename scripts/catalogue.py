from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from bookbrainz_api.enums import EntityType
from bookbrainz_api.models.base import new_bbid
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
)


class CatalogueBuilder:
    """Adds catalogue rows to a session, for seeding an empty database.

    Only `Session.add` is used, so the caller decides when to flush or
    commit and both sync and async sessions work. Lookup rows (languages,
    formats, statuses, types) are created once per builder.
    """

    def __init__(self, db: Session | AsyncSession) -> None:
        self.db = db
        self._languages: dict[str, Language] = {}
        self._formats: dict[str, EditionFormat] = {}
        self._statuses: dict[str, EditionStatus] = {}
        self._identifier_types: dict[str, IdentifierType] = {}
        self._relationship_types: dict[tuple[str, EntityType, EntityType], RelationshipType] = {}

    def language(self, name: str, iso_code: str | None = None) -> Language:
        if name not in self._languages:
            self._languages[name] = Language(name=name, iso_code=iso_code)
            self.db.add(self._languages[name])
        return self._languages[name]

    def edition_format(self, label: str) -> EditionFormat:
        if label not in self._formats:
            self._formats[label] = EditionFormat(label=label)
            self.db.add(self._formats[label])
        return self._formats[label]

    def edition_status(self, label: str) -> EditionStatus:
        if label not in self._statuses:
            self._statuses[label] = EditionStatus(label=label)
            self.db.add(self._statuses[label])
        return self._statuses[label]

    def identifier_type(self, label: str, entity_type: EntityType = EntityType.edition) -> IdentifierType:
        if label not in self._identifier_types:
            self._identifier_types[label] = IdentifierType(label=label, entity_type=entity_type)
            self.db.add(self._identifier_types[label])
        return self._identifier_types[label]

    def relationship_type(
        self,
        label: str,
        source_type: EntityType,
        target_type: EntityType,
        *,
        link_phrase: str | None = None,
        reverse_link_phrase: str | None = None,
    ) -> RelationshipType:
        key = (label, source_type, target_type)
        if key not in self._relationship_types:
            self._relationship_types[key] = RelationshipType(
                label=label,
                link_phrase=link_phrase or label.lower(),
                reverse_link_phrase=reverse_link_phrase or f"{label.lower()} of",
                source_entity_type=source_type,
                target_entity_type=target_type,
            )
            self.db.add(self._relationship_types[key])
        return self._relationship_types[key]

    def entity(
        self,
        kind: EntityType,
        name: str | None,
        *,
        bbid: str | None = None,
        alias_language: str | None = "English",
        disambiguation: str | None = None,
        languages: Sequence[str] = (),
        edition_format: str | None = None,
        status: str | None = None,
        edition_group: Entity | None = None,
        publishers: Iterable[Entity] = (),
        release_dates: Sequence[str] = (),
        identifiers: Sequence[tuple[str, str]] = (),
        width: int | None = None,
        height: int | None = None,
        depth: int | None = None,
        weight: int | None = None,
        pages: int | None = None,
    ) -> Entity:
        """Add an entity; `name` becomes its primary default alias when given."""
        entity = Entity(
            bbid=bbid or new_bbid(),
            entity_type=kind,
            disambiguation=disambiguation,
            edition_format=self.edition_format(edition_format) if edition_format else None,
            edition_status=self.edition_status(status) if status else None,
            edition_group=edition_group,
            publishers=list(publishers),
            language_links=[
                EntityLanguage(language=self.language(language), position=position)
                for position, language in enumerate(dict.fromkeys(languages))
            ],
            release_events=[ReleaseEvent(date=date) for date in release_dates],
            width=width,
            height=height,
            depth=depth,
            weight=weight,
            pages=pages,
        )
        self.db.add(entity)
        if name is not None:
            entity.default_alias = self.alias(entity, name, language=alias_language, primary=True)
        for type_label, value in identifiers:
            self.db.add(
                Identifier(entity_bbid=entity.bbid, type=self.identifier_type(type_label, kind), value=value)
            )
        return entity

    def alias(
        self,
        entity: Entity,
        name: str,
        *,
        sort_name: str | None = None,
        language: str | None = None,
        primary: bool = False,
    ) -> Alias:
        alias = Alias(
            entity_bbid=entity.bbid,
            name=name,
            sort_name=sort_name or name,
            language=self.language(language) if language else None,
            primary=primary,
        )
        self.db.add(alias)
        return alias

    def relate(self, source: Entity, target: Entity, relationship_type: RelationshipType) -> EntityRelationship:
        row = EntityRelationship(type=relationship_type, source_bbid=source.bbid, target_bbid=target.bbid)
        self.db.add(row)
        return row
