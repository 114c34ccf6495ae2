from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookbrainz_api.enums import EntityType
from bookbrainz_api.models.base import Base, TimestampedMixin, new_bbid

edition_publishers = Table(
    "edition_publishers",
    Base.metadata,
    Column("edition_bbid", ForeignKey("entities.bbid"), primary_key=True),
    Column("publisher_bbid", ForeignKey("entities.bbid"), primary_key=True),
    Index("ix_edition_publishers_publisher_bbid", "publisher_bbid"),
)


class Language(Base):
    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    iso_code: Mapped[str | None] = mapped_column(String(3), nullable=True)


class EditionFormat(Base):
    __tablename__ = "edition_formats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)


class EditionStatus(Base):
    __tablename__ = "edition_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)


class Entity(Base, TimestampedMixin):
    __tablename__ = "entities"
    __table_args__ = (
        Index("ix_entities_entity_type", "entity_type"),
        Index("ix_entities_edition_group_bbid", "edition_group_bbid"),
    )

    bbid: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_bbid)
    entity_type: Mapped[EntityType] = mapped_column(Enum(EntityType), nullable=False)
    default_alias_id: Mapped[int | None] = mapped_column(
        ForeignKey("aliases.id", use_alter=True, name="fk_entities_default_alias_id"), nullable=True
    )
    disambiguation: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Edition-only attributes; other entity types leave them empty.
    edition_format_id: Mapped[int | None] = mapped_column(ForeignKey("edition_formats.id"), nullable=True)
    edition_status_id: Mapped[int | None] = mapped_column(ForeignKey("edition_statuses.id"), nullable=True)
    edition_group_bbid: Mapped[str | None] = mapped_column(ForeignKey("entities.bbid"), nullable=True)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    depth: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pages: Mapped[int | None] = mapped_column(Integer, nullable=True)

    default_alias: Mapped["Alias | None"] = relationship(
        foreign_keys=[default_alias_id], post_update=True, lazy="raise"
    )
    aliases: Mapped[list["Alias"]] = relationship(
        back_populates="entity", foreign_keys="Alias.entity_bbid", order_by="Alias.id", lazy="raise"
    )
    edition_format: Mapped["EditionFormat | None"] = relationship(lazy="raise")
    edition_status: Mapped["EditionStatus | None"] = relationship(lazy="raise")
    language_links: Mapped[list["EntityLanguage"]] = relationship(
        order_by="EntityLanguage.position", cascade="all, delete-orphan", lazy="raise"
    )
    release_events: Mapped[list["ReleaseEvent"]] = relationship(order_by="ReleaseEvent.id", lazy="raise")
    identifiers: Mapped[list["Identifier"]] = relationship(order_by="Identifier.id", lazy="raise")

    edition_group: Mapped["Entity | None"] = relationship(
        remote_side="Entity.bbid", back_populates="editions", lazy="raise"
    )
    editions: Mapped[list["Entity"]] = relationship(
        back_populates="edition_group", order_by="Entity.bbid", lazy="raise"
    )
    publishers: Mapped[list["Entity"]] = relationship(
        secondary=edition_publishers,
        primaryjoin=lambda: Entity.bbid == edition_publishers.c.edition_bbid,
        secondaryjoin=lambda: Entity.bbid == edition_publishers.c.publisher_bbid,
        back_populates="published_editions",
        lazy="raise",
    )
    published_editions: Mapped[list["Entity"]] = relationship(
        secondary=edition_publishers,
        primaryjoin=lambda: Entity.bbid == edition_publishers.c.publisher_bbid,
        secondaryjoin=lambda: Entity.bbid == edition_publishers.c.edition_bbid,
        back_populates="publishers",
        lazy="raise",
    )

    outgoing_relationships: Mapped[list["EntityRelationship"]] = relationship(
        foreign_keys="EntityRelationship.source_bbid",
        back_populates="source",
        order_by="EntityRelationship.id",
        lazy="raise",
    )
    incoming_relationships: Mapped[list["EntityRelationship"]] = relationship(
        foreign_keys="EntityRelationship.target_bbid",
        back_populates="target",
        order_by="EntityRelationship.id",
        lazy="raise",
    )


class Alias(Base):
    __tablename__ = "aliases"
    __table_args__ = (Index("ix_aliases_entity_bbid", "entity_bbid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entity_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), nullable=False)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    sort_name: Mapped[str] = mapped_column(String(512), nullable=False)
    language_id: Mapped[int | None] = mapped_column(ForeignKey("languages.id"), nullable=True)
    primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    entity: Mapped["Entity"] = relationship(back_populates="aliases", foreign_keys=[entity_bbid], lazy="raise")
    language: Mapped["Language | None"] = relationship(lazy="raise")


class EntityLanguage(Base):
    __tablename__ = "entity_languages"

    entity_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), primary_key=True)
    language_id: Mapped[int] = mapped_column(ForeignKey("languages.id"), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    language: Mapped["Language"] = relationship(lazy="raise")


class ReleaseEvent(Base):
    __tablename__ = "release_events"
    __table_args__ = (Index("ix_release_events_entity_bbid", "entity_bbid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entity_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), nullable=False)
    date: Mapped[str | None] = mapped_column(String(10), nullable=True)


class IdentifierType(Base):
    __tablename__ = "identifier_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    entity_type: Mapped[EntityType] = mapped_column(Enum(EntityType), nullable=False)


class Identifier(Base):
    __tablename__ = "identifiers"
    __table_args__ = (
        Index("ix_identifiers_entity_bbid", "entity_bbid"),
        UniqueConstraint("entity_bbid", "type_id", "value", name="uq_identifiers_entity_type_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entity_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), nullable=False)
    type_id: Mapped[int] = mapped_column(ForeignKey("identifier_types.id"), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    type: Mapped["IdentifierType"] = relationship(lazy="raise")


class RelationshipType(Base):
    __tablename__ = "relationship_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    link_phrase: Mapped[str] = mapped_column(String(255), nullable=False)
    reverse_link_phrase: Mapped[str] = mapped_column(String(255), nullable=False)
    source_entity_type: Mapped[EntityType] = mapped_column(Enum(EntityType), nullable=False)
    target_entity_type: Mapped[EntityType] = mapped_column(Enum(EntityType), nullable=False)


class EntityRelationship(Base):
    __tablename__ = "relationships"
    __table_args__ = (
        Index("ix_relationships_source_bbid", "source_bbid"),
        Index("ix_relationships_target_bbid", "target_bbid"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type_id: Mapped[int] = mapped_column(ForeignKey("relationship_types.id"), nullable=False)
    source_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), nullable=False)
    target_bbid: Mapped[str] = mapped_column(ForeignKey("entities.bbid"), nullable=False)

    type: Mapped["RelationshipType"] = relationship(lazy="raise")
    source: Mapped["Entity"] = relationship(
        foreign_keys=[source_bbid], back_populates="outgoing_relationships", lazy="raise"
    )
    target: Mapped["Entity"] = relationship(
        foreign_keys=[target_bbid], back_populates="incoming_relationships", lazy="raise"
    )
