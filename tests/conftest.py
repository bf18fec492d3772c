import os

os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")

import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.core.supabase_client import get_auth_client
from app.main import app
from fake_supabase import FakeSupabase


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_auth_client] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    return db.add_user("owner@x.com")


@pytest.fixture
def stranger(db):
    return db.add_user("stranger@x.com")


@pytest.fixture
def video(db, owner):
    return db.add_video(owner.id)
