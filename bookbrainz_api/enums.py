from enum import Enum


class EntityType(str, Enum):
    author = "Author"
    edition = "Edition"
    edition_group = "EditionGroup"
    work = "Work"
    publisher = "Publisher"


class EdgeDirection(str, Enum):
    outgoing = "outgoing"
    incoming = "incoming"


class AssociationSource(str, Enum):
    generic = "generic"
    containment = "containment"
    ownership = "ownership"


# Query-string keys accepted by browse requests.
BROWSE_QUERY_KEYS: dict[str, EntityType] = {
    "author": EntityType.author,
    "edition": EntityType.edition,
    "edition-group": EntityType.edition_group,
    "publisher": EntityType.publisher,
    "work": EntityType.work,
}
