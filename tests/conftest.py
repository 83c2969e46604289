import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from message_board import storage
from message_board.main import app
from message_board.models import Base


def _session_factory(url: str, create_tables: bool = True):
    engine = create_engine(url, connect_args={"check_same_thread": False})
    if create_tables:
        Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def session_factory(tmp_path):
    """Sessions bound to a fresh SQLite file per test."""
    engine, factory = _session_factory(f"sqlite:///{tmp_path / 'test.db'}")
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, monkeypatch):
    # get_db itself stays in play; only the session source is swapped
    monkeypatch.setattr(storage, "SessionLocal", session_factory)
    return TestClient(app)


@pytest.fixture
def client_without_tables(tmp_path, monkeypatch):
    """Database reachable, but the messages table was never created."""
    engine, factory = _session_factory(
        f"sqlite:///{tmp_path / 'empty.db'}", create_tables=False
    )
    monkeypatch.setattr(storage, "SessionLocal", factory)
    yield TestClient(app)
    engine.dispose()


@pytest.fixture
def unreachable_client(tmp_path, monkeypatch):
    """Database path whose parent directory does not exist."""
    engine, factory = _session_factory(
        f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}", create_tables=False
    )
    monkeypatch.setattr(storage, "SessionLocal", factory)
    yield TestClient(app)
    engine.dispose()
