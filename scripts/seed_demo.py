import asyncio

from bookbrainz_api.database import SessionLocal, engine
from bookbrainz_api.enums import EntityType
from bookbrainz_api.models.base import Base
from scripts.catalogue import CatalogueBuilder


async def seed() -> dict[str, str]:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        catalogue = CatalogueBuilder(db)
        author = catalogue.entity(EntityType.author, "Ursula K. Le Guin")
        work = catalogue.entity(EntityType.work, "The Left Hand of Darkness", languages=["English"])
        group = catalogue.entity(EntityType.edition_group, "The Left Hand of Darkness")
        publisher = catalogue.entity(EntityType.publisher, "Ace Books")
        hardcover = catalogue.entity(
            EntityType.edition,
            "The Left Hand of Darkness (hardcover)",
            languages=["English"],
            edition_format="Hardcover",
            status="Official",
            edition_group=group,
            publishers=[publisher],
            release_dates=["1969-03-01"],
            identifiers=[("ISBN-13", "9780441478125")],
            height=180,
            width=110,
            pages=286,
        )
        ebook = catalogue.entity(
            EntityType.edition,
            "The Left Hand of Darkness (eBook)",
            languages=["English"],
            edition_format="eBook",
            status="Official",
            edition_group=group,
            release_dates=["2010-08-01"],
        )
        translation = catalogue.entity(
            EntityType.edition,
            "La Main gauche de la nuit",
            alias_language="French",
            languages=["French"],
            edition_format="eBook",
            status="Official",
            edition_group=group,
        )
        contains = catalogue.relationship_type(
            "Contains", EntityType.edition, EntityType.work, link_phrase="contains", reverse_link_phrase="is contained by"
        )
        wrote = catalogue.relationship_type(
            "Author", EntityType.author, EntityType.work, link_phrase="wrote", reverse_link_phrase="was written by"
        )
        catalogue.relate(author, work, wrote)
        for edition in (hardcover, ebook, translation):
            catalogue.relate(edition, work, contains)
        await db.commit()

    return {
        "author": author.bbid,
        "work": work.bbid,
        "edition-group": group.bbid,
        "publisher": publisher.bbid,
        "edition": hardcover.bbid,
    }


def main() -> int:
    for key, bbid in asyncio.run(seed()).items():
        print(f"{key}: {bbid}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
