import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_bookbrainz.db")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from bookbrainz_api.config import get_settings  # noqa: E402
from bookbrainz_api.main import create_app  # noqa: E402
from bookbrainz_api.models.base import Base  # noqa: E402
from scripts.catalogue import CatalogueBuilder  # noqa: E402

# Schema setup and seeding go through a plain sqlite connection to the same file.
sync_engine = create_engine(make_url(get_settings().database_url).set(drivername="sqlite+pysqlite"), future=True)
SyncSessionLocal = sessionmaker(bind=sync_engine, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    with SyncSessionLocal() as db:
        yield db
        db.rollback()


@pytest.fixture()
def catalogue(db_session):
    return CatalogueBuilder(db_session)
