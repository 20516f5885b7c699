import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from client_registry.api.main import app
from client_registry.db import models
from client_registry.db.database import get_db


# Fresh in-memory schema per test
@pytest.fixture
def _engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        models.Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def _SessionLocal(_engine):
    return sessionmaker(bind=_engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(_SessionLocal):
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api(_SessionLocal):
    """TestClient whose requests use the per-test database."""

    def _override_get_db():
        session = _SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


VALID_TAX_IDS = ["52998224725", "11144477735", "39053344705", "12345678909"]


@pytest.fixture
def valid_tax_ids():
    return list(VALID_TAX_IDS)


@pytest.fixture
def client_payload():
    def _payload(tax_id="529.982.247-25", phones=None, emails=None, **extra):
        payload = {
            "name": "Maria Silva",
            "tax_id": tax_id,
            "phones": phones if phones is not None else [{"number": "(11) 98765-4321", "kind": "MOBILE"}],
            "emails": emails if emails is not None else [{"address": "maria@example.com"}],
        }
        payload.update(extra)
        return payload

    return _payload
