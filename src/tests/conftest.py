import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from core.db import build_engine, create_tables, init_db, set_engine
from core.rate_limiter import InMemoryRateLimitStore, RateLimiter
from main import create_app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_tables(engine)
    set_engine(engine)
    yield engine
    set_engine(None)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded_session(db_session: Session):
    init_db(db_session, seed=True)
    return db_session


@pytest.fixture
def rate_limiter():
    return RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=100,
        window_seconds=60,
        cleanup_probability=0,
    )


@pytest.fixture
def client(engine, rate_limiter):
    app = create_app(rate_limiter=rate_limiter)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(seeded_session, client):
    return client
