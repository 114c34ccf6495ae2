from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from bookbrainz_api.enums import EdgeDirection, EntityType


class AliasOut(BaseModel):
    name: str
    sort_name: str
    language: str | None = None
    primary: bool = False


class EntityProjection(BaseModel):
    bbid: str
    entity_type: EntityType
    default_alias: AliasOut | None = None
    disambiguation: str | None = None
    edition_format: str | None = None
    status: str | None = None
    languages: list[str] = Field(default_factory=list)
    height: int | None = None
    width: int | None = None
    depth: int | None = None
    weight: int | None = None
    pages: int | None = None
    release_date: str | None = None


class RelationshipEdge(BaseModel):
    relationship_type_id: int
    relationship_type: str
    direction: EdgeDirection


class EmptyRelationship(BaseModel):
    """Placeholder for associations that carry no relationship type."""

    model_config = ConfigDict(extra="forbid")


class BrowseRecord(BaseModel):
    entity: EntityProjection
    relationship: RelationshipEdge | EmptyRelationship


class BrowseEditionsResponse(BaseModel):
    anchor_id: str
    editions: list[BrowseRecord]


class AliasesResponse(BaseModel):
    bbid: str
    default_alias: AliasOut | None = None
    aliases: list[AliasOut]


class IdentifierOut(BaseModel):
    type_id: int
    type: str
    value: str


class IdentifiersResponse(BaseModel):
    bbid: str
    identifiers: list[IdentifierOut]


class EntityRef(BaseModel):
    bbid: str
    entity_type: EntityType
    default_alias_name: str | None = None


class RelationshipOut(BaseModel):
    id: int
    relationship_type_id: int
    relationship_type: str
    direction: EdgeDirection
    link_phrase: str
    source: EntityRef
    target: EntityRef


class RelationshipsResponse(BaseModel):
    bbid: str
    relationships: list[RelationshipOut]


class HealthResponse(BaseModel):
    status: Literal["ok"]
    timestamp: datetime


class HealthDetailsResponse(BaseModel):
    status: Literal["ok"]
    timestamp: datetime
    database_ok: bool
    entity_counts: dict[str, int]
