import os
import tempfile
from datetime import datetime, timedelta, timezone

# configure before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="elite-memoriz-logs-")
os.environ["OPENAI_API_KEY"] = ""
os.environ["STORAGE_PROVIDER"] = "SUPABASE"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.database import Base, get_db
from app.models.event import Event, EventCategory
from app.models.memory import Memory
from app.models.profile import Profile, Role, Tier
from app.services import ai_service, identity_service
from app.services.identity_service import AuthUser
from app.services.storage_service import StorageProvider, get_storage

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TOKENS = {
    "host-token": AuthUser(id="host-1", email="host@example.com"),
    "other-token": AuthUser(id="host-2", email="other@example.com"),
    "admin-token": AuthUser(id="admin-1", email="admin@example.com"),
}


class FakeStorage(StorageProvider):
    """In-memory blobs"""

    def __init__(self):
        self.blobs = {}
        self.deleted = []
        self.fail_delete = False

    def upload_file(self, content, path, content_type=None):
        self.blobs[path] = content
        return f"memory://{path}"

    def delete_file(self, path):
        self.deleted.append(path)
        if self.fail_delete:
            raise RuntimeError("storage unavailable")
        self.blobs.pop(path, None)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def ai_calls(monkeypatch):
    calls = []

    def fake_rewrite(raw_text, image=None, mime_type=None):
        calls.append({"text": raw_text, "image": image, "mime_type": mime_type})
        return f"A story about: {raw_text}"

    monkeypatch.setattr(ai_service, "rewrite_memory", fake_rewrite)
    return calls


@pytest.fixture(autouse=True)
def fake_identity(monkeypatch):
    async def fake_verify(token):
        return TOKENS.get(token)

    monkeypatch.setattr(identity_service, "verify_access_token", fake_verify)


@pytest.fixture
def client(db, storage, ai_calls):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth(token="host-token"):
    return {"Authorization": f"Bearer {token}"}


def make_profile(db, user_id="host-1", email="host@example.com", role=Role.HOST, tier=Tier.BASIC):
    profile = Profile(id=user_id, email=email, role=role, tier=tier)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def make_event(db, owner, slug="summer-party-ab12", **fields):
    now = datetime.now(timezone.utc)
    values = {
        "user_id": owner.id,
        "title": "Summer Party",
        "date": now,
        "slug": slug,
        "category": EventCategory.PARTY,
        "package": owner.tier,
        "storage_used": 0,
        "is_expired": False,
        "expires_at": now + timedelta(days=30),
    }
    values.update(fields)
    event = Event(**values)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def make_memory(db, event, approved=False, file_size=1024, **fields):
    memory = Memory(
        event_id=event.id,
        storage_path=f"events/{event.id}/seed-{file_size}.jpg",
        original_text="seeded",
        ai_story="seeded story",
        is_approved=approved,
        file_size=file_size,
        **fields
    )
    db.add(memory)
    db.commit()
    db.refresh(memory)
    return memory
