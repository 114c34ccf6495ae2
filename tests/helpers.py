from uuid import uuid4

from bookbrainz_api.enums import EntityType
from scripts.catalogue import CatalogueBuilder


def random_bbid() -> str:
    return str(uuid4())


def build_edition_group_catalogue(catalogue: CatalogueBuilder) -> dict:
    """An edition group with three member editions and one edition linked by a relationship row."""
    group = catalogue.entity(EntityType.edition_group, "The Dispossessed")
    e1 = catalogue.entity(
        EntityType.edition,
        "The Dispossessed (hardcover)",
        languages=["English"],
        edition_format="Hardcover",
        status="Official",
        edition_group=group,
    )
    e2 = catalogue.entity(
        EntityType.edition,
        "The Dispossessed (eBook)",
        languages=["English"],
        edition_format="eBook",
        status="Official",
        edition_group=group,
    )
    e3 = catalogue.entity(
        EntityType.edition,
        "Les Dépossédés",
        alias_language="French",
        languages=["French"],
        edition_format="eBook",
        status="Official",
        edition_group=group,
    )
    linked = catalogue.entity(
        EntityType.edition,
        "The Dispossessed (audio)",
        languages=["English"],
        edition_format="Audiobook",
    )
    related = catalogue.relationship_type("Related Edition", EntityType.edition_group, EntityType.edition)
    catalogue.relate(group, linked, related)
    return {"group": group, "e1": e1, "e2": e2, "e3": e3, "linked": linked, "related_type": related}


def build_work_catalogue(catalogue: CatalogueBuilder) -> dict:
    """An author who wrote a work contained in one edition published by a publisher."""
    author = catalogue.entity(EntityType.author, "Ursula K. Le Guin")
    work = catalogue.entity(EntityType.work, "The Word for World Is Forest", languages=["English"])
    publisher = catalogue.entity(EntityType.publisher, "Berkley Books")
    edition = catalogue.entity(
        EntityType.edition,
        "The Word for World Is Forest (paperback)",
        languages=["English"],
        edition_format="Paperback",
        status="Official",
        publishers=[publisher],
        release_dates=["1976-09-01", "1972-03-01"],
        identifiers=[("ISBN-10", "0425030601")],
        height=178,
        width=106,
        pages=189,
    )
    wrote = catalogue.relationship_type(
        "Author", EntityType.author, EntityType.work, link_phrase="wrote", reverse_link_phrase="was written by"
    )
    contains = catalogue.relationship_type(
        "Contains", EntityType.edition, EntityType.work, link_phrase="contains", reverse_link_phrase="is contained by"
    )
    catalogue.relate(author, work, wrote)
    catalogue.relate(edition, work, contains)
    return {
        "author": author,
        "work": work,
        "publisher": publisher,
        "edition": edition,
        "wrote": wrote,
        "contains": contains,
    }
