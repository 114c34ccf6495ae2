from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from bookbrainz_api.database import SessionLocal, get_db, get_session_factory
from bookbrainz_api.enums import EntityType
from bookbrainz_api.main import create_app
from tests.helpers import build_edition_group_catalogue, build_work_catalogue, random_bbid


class ExplodingSession:
    def __getattr__(self, name):
        raise AssertionError(f"storage was accessed: {name}")


class ExplodingFactory:
    def __call__(self):
        raise AssertionError("storage was accessed")


class BrokenSession:
    async def scalar(self, stmt):
        raise OperationalError("SELECT entities", {}, Exception("disk I/O error at /var/lib/db"))


class BrokenListingSession:
    """Single-row reads work, multi-row reads fail."""

    def __init__(self):
        self._session = SessionLocal()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self._session.close()

    async def scalar(self, stmt):
        return await self._session.scalar(stmt)

    async def scalars(self, stmt):
        raise OperationalError("SELECT relationships", {}, Exception("disk I/O error at /var/lib/db"))


def _client_with(overrides: dict) -> TestClient:
    app = create_app()
    app.dependency_overrides.update(overrides)
    return TestClient(app)


def test_get_edition_returns_basic_info(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    response = client.get(f"/edition/{rows['edition'].bbid}")

    assert response.status_code == 200
    body = response.json()
    assert body["bbid"] == rows["edition"].bbid
    assert body["entity_type"] == "Edition"
    assert body["default_alias"]["name"] == "The Word for World Is Forest (paperback)"
    assert body["edition_format"] == "Paperback"
    assert body["status"] == "Official"
    assert body["languages"] == ["English"]
    assert body["height"] == 178
    assert body["depth"] is None
    assert body["release_date"] == "1972-03-01"


def test_get_edition_unknown_bbid_returns_404(client):
    response = client.get(f"/edition/{random_bbid()}")
    assert response.status_code == 404
    assert response.json() == {"detail": "Edition not found"}


def test_get_edition_of_another_kind_returns_404(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    response = client.get(f"/edition/{rows['work'].bbid}")
    assert response.status_code == 404


def test_malformed_bbid_returns_400_without_storage_access():
    async def _no_db():
        yield ExplodingSession()

    with _client_with({get_db: _no_db}) as client:
        for path in (
            "/edition/not-a-uuid",
            "/edition/not-a-uuid/aliases",
            "/edition/not-a-uuid/identifiers",
            "/edition/not-a-uuid/relationships",
        ):
            response = client.get(path)
            assert response.status_code == 400
            assert "Invalid BBID" in response.json()["detail"]


def test_storage_failure_returns_opaque_502():
    async def _broken_db():
        yield BrokenSession()

    with _client_with({get_db: _broken_db}) as client:
        response = client.get(f"/edition/{random_bbid()}")
    assert response.status_code == 502
    assert response.json() == {"detail": "storage_unavailable"}
    assert "disk" not in response.text


def test_get_edition_aliases(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    catalogue.alias(rows["edition"], "Le nom du monde est forêt", language="French")
    db_session.commit()

    response = client.get(f"/edition/{rows['edition'].bbid}/aliases")

    assert response.status_code == 200
    body = response.json()
    assert body["bbid"] == rows["edition"].bbid
    assert body["default_alias"]["primary"] is True
    assert [alias["language"] for alias in body["aliases"]] == ["English", "French"]


def test_get_edition_identifiers(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    response = client.get(f"/edition/{rows['edition'].bbid}/identifiers")

    assert response.status_code == 200
    identifiers = response.json()["identifiers"]
    assert [(item["type"], item["value"]) for item in identifiers] == [("ISBN-10", "0425030601")]


def test_get_edition_relationships(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    response = client.get(f"/edition/{rows['edition'].bbid}/relationships")

    assert response.status_code == 200
    relationships = response.json()["relationships"]
    assert len(relationships) == 1
    assert relationships[0]["relationship_type"] == "Contains"
    assert relationships[0]["direction"] == "outgoing"
    assert relationships[0]["target"]["bbid"] == rows["work"].bbid
    assert relationships[0]["target"]["default_alias_name"] == "The Word for World Is Forest"


def test_browse_edition_group_filters_members(client, catalogue, db_session):
    rows = build_edition_group_catalogue(catalogue)
    db_session.commit()

    response = client.get(
        "/edition",
        params={"edition-group": rows["group"].bbid, "format": "ebook", "language": "english"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["anchor_id"] == rows["group"].bbid
    assert [record["entity"]["bbid"] for record in body["editions"]] == [rows["e2"].bbid]
    assert body["editions"][0]["relationship"] == {}


def test_browse_edition_group_mixes_edges_and_members(client, catalogue, db_session):
    rows = build_edition_group_catalogue(catalogue)
    db_session.commit()

    response = client.get("/edition", params={"edition-group": rows["group"].bbid})

    editions = response.json()["editions"]
    assert len(editions) == 4
    assert editions[0]["relationship"] == {
        "relationship_type_id": rows["related_type"].id,
        "relationship_type": "Related Edition",
        "direction": "outgoing",
    }
    assert [record["relationship"] for record in editions[1:]] == [{}, {}, {}]


def test_browse_by_work_and_author(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    by_work = client.get("/edition", params={"work": rows["work"].bbid}).json()
    by_author = client.get("/edition", params={"author": rows["author"].bbid}).json()

    assert [record["entity"]["bbid"] for record in by_work["editions"]] == [rows["edition"].bbid]
    assert by_work["editions"][0]["relationship"]["direction"] == "incoming"
    assert by_author == {"anchor_id": rows["author"].bbid, "editions": []}


def test_browse_by_publisher(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    response = client.get("/edition", params={"publisher": rows["publisher"].bbid})

    editions = response.json()["editions"]
    assert [record["entity"]["bbid"] for record in editions] == [rows["edition"].bbid]
    assert editions[0]["relationship"] == {}


def test_browse_requires_exactly_one_anchor(client):
    assert client.get("/edition").status_code == 400
    response = client.get("/edition", params={"author": random_bbid(), "work": random_bbid()})
    assert response.status_code == 400
    assert "Only one of" in response.json()["detail"]


def test_browse_malformed_anchor_returns_400_without_storage_access():
    with _client_with({get_session_factory: lambda: ExplodingFactory()}) as client:
        response = client.get("/edition", params={"edition-group": "not-a-uuid"})
    assert response.status_code == 400


def test_browse_unknown_or_mismatched_anchor_returns_404(client, catalogue, db_session):
    rows = build_work_catalogue(catalogue)
    db_session.commit()

    unknown = client.get("/edition", params={"author": random_bbid()})
    mismatched = client.get("/edition", params={"author": rows["work"].bbid})

    assert unknown.status_code == 404
    assert unknown.json() == {"detail": "Entity not found"}
    assert mismatched.status_code == 404


def test_browse_echoes_anchor_id_unchanged(client, catalogue, db_session):
    author = catalogue.entity(EntityType.author, "Anonymous")
    db_session.commit()

    response = client.get("/edition", params={"author": author.bbid.upper()})

    assert response.status_code == 200
    assert response.json() == {"anchor_id": author.bbid.upper(), "editions": []}


def test_browse_storage_failure_in_resolvers_returns_opaque_502(catalogue, db_session, caplog):
    rows = build_edition_group_catalogue(catalogue)
    db_session.commit()

    with _client_with({get_session_factory: lambda: BrokenListingSession}) as client:
        response = client.get("/edition", params={"edition-group": rows["group"].bbid})

    assert response.status_code == 502
    assert response.json() == {"detail": "storage_unavailable"}
    assert "disk" not in response.text
    assert "Storage failure while resolving" in caplog.text
