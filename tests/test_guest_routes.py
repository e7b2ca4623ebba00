from datetime import datetime, timedelta, timezone

from conftest import make_event, make_memory, make_profile
from app.models.event import Event
from app.models.memory import Memory
from app.models.profile import Tier
from app.services.quota_service import MB

JPEG = "image/jpeg"


def upload(client, slug, content=b"x" * 51200, caption="Lovely day", filename="party photo.jpg", content_type=JPEG):
    return client.post(
        f"/api/events/{slug}/upload",
        files={"photo": (filename, content, content_type)},
        data={"memory": caption},
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_event_returns_public_details(client, db):
    event = make_event(db, make_profile(db), welcome_message="Welcome!")

    response = client.get(f"/api/events/{event.slug}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == event.id
    assert body["title"] == "Summer Party"
    assert body["welcomeMessage"] == "Welcome!"
    assert "storageUsed" not in body


def test_get_event_unknown_slug(client, db):
    assert client.get("/api/events/nope-0000").status_code == 404


def test_get_event_expired_by_flag(client, db):
    event = make_event(db, make_profile(db), is_expired=True)
    assert client.get(f"/api/events/{event.slug}").status_code == 403


def test_get_event_expired_by_date(client, db):
    past = datetime.now(timezone.utc) - timedelta(days=1)
    event = make_event(db, make_profile(db), expires_at=past)
    assert client.get(f"/api/events/{event.slug}").status_code == 403


def test_gallery_hides_unapproved(client, db):
    event = make_event(db, make_profile(db))
    approved = make_memory(db, event, approved=True)
    make_memory(db, event, approved=False)

    response = client.get(f"/api/events/{event.slug}/memories")

    assert response.status_code == 200
    ids = [m["id"] for m in response.json()]
    assert ids == [approved.id]
    assert response.json()[0]["isApproved"] is True


def test_gallery_caps_at_fifty(client, db):
    event = make_event(db, make_profile(db, tier=Tier.VIP))
    for _ in range(55):
        make_memory(db, event, approved=True)

    response = client.get(f"/api/events/{event.slug}/memories")

    assert len(response.json()) == 50


def test_upload_creates_pending_memory(client, db, storage, ai_calls):
    event = make_event(db, make_profile(db))

    response = upload(client, event.slug)

    assert response.status_code == 201
    assert response.json() == {
        "message": "Memory captured successfully!",
        "story": "A story about: Lovely day",
    }

    db.expire_all()
    memory = db.query(Memory).filter(Memory.event_id == event.id).one()
    assert memory.is_approved is False
    assert memory.file_size == 51200
    assert memory.original_text == "Lovely day"
    assert memory.ai_story == "A story about: Lovely day"
    assert memory.storage_path.startswith(f"events/{event.id}/")
    assert memory.storage_path.endswith("-party_photo.jpg")
    assert memory.storage_path in storage.blobs
    assert db.get(Event, event.id).storage_used == 51200

    # the image goes to the AI service with its MIME type
    assert ai_calls[0]["image"] == b"x" * 51200
    assert ai_calls[0]["mime_type"] == JPEG


def test_upload_video_is_typed_video(client, db):
    event = make_event(db, make_profile(db))

    response = upload(client, event.slug, filename="clip.mp4", content_type="video/mp4")

    assert response.status_code == 201
    db.expire_all()
    assert db.query(Memory).one().type.value == "video"


def test_upload_without_file(client, db):
    event = make_event(db, make_profile(db))

    response = client.post(f"/api/events/{event.slug}/upload", data={"memory": "hi"})

    assert response.status_code == 400


def test_upload_rejects_unsupported_type(client, db, storage):
    event = make_event(db, make_profile(db))

    response = upload(client, event.slug, filename="notes.txt", content_type="text/plain")

    assert response.status_code == 400
    assert storage.blobs == {}


def test_upload_unknown_event(client, db):
    assert upload(client, "missing-abcd").status_code == 404


def test_upload_to_expired_event(client, db, storage):
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    event = make_event(db, make_profile(db), expires_at=past)

    response = upload(client, event.slug)

    assert response.status_code == 403
    assert storage.blobs == {}


def test_upload_count_limit(client, db, storage):
    event = make_event(db, make_profile(db))
    for _ in range(20):
        make_memory(db, event, file_size=10)
    db.get(Event, event.id).storage_used = 200
    db.commit()

    response = upload(client, event.slug)

    assert response.status_code == 403
    db.expire_all()
    assert db.query(Memory).filter(Memory.event_id == event.id).count() == 20
    assert db.get(Event, event.id).storage_used == 200
    assert storage.blobs == {}


def test_storage_limit_rejected_before_storage_call(client, db, storage, ai_calls):
    event = make_event(db, make_profile(db), storage_used=100 * MB - 10)

    response = upload(client, event.slug, content=b"y" * 11)

    assert response.status_code == 403
    assert storage.blobs == {}
    assert ai_calls == []
    db.expire_all()
    assert db.get(Event, event.id).storage_used == 100 * MB - 10
    assert db.query(Memory).count() == 0


def test_storage_limit_exact_fit_allowed(client, db):
    event = make_event(db, make_profile(db), storage_used=100 * MB - 11)

    response = upload(client, event.slug, content=b"y" * 11)

    assert response.status_code == 201
    db.expire_all()
    assert db.get(Event, event.id).storage_used == 100 * MB


def test_vip_has_no_upload_count_limit(client, db):
    event = make_event(db, make_profile(db, tier=Tier.VIP))
    for _ in range(120):
        make_memory(db, event, file_size=1)

    assert upload(client, event.slug).status_code == 201
