# app/services/event_service.py
import re
import secrets
import string
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.logger import logger
from app.models.event import Event
from app.models.profile import Profile
from app.schemas.event import EventCreate
from app.services.storage_service import StorageProvider, delete_quietly

SLUG_SUFFIX_LENGTH = 4
SLUG_ALPHABET = string.ascii_lowercase + string.digits
MAX_SLUG_ATTEMPTS = 5

def slugify(title: str) -> str:
    """'Anna & Tom 2025!' -> 'anna-tom-2025'"""
    base = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return base or "event"

def generate_slug(title: str) -> str:
    suffix = "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_SUFFIX_LENGTH))
    return f"{slugify(title)}-{suffix}"

def get_event_by_slug(db: Session, slug: str) -> Event:
    event = db.query(Event).filter(Event.slug == slug).first()
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    return event

def get_event_by_id(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    return event

def ensure_not_expired(event: Event) -> None:
    if event.has_expired():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This event has expired. No new memories can be added."
        )

def create_event(db: Session, profile: Profile, data: EventCreate) -> Event:
    """Persist a new event owned by profile, retrying on slug collision"""
    now = datetime.now(timezone.utc)

    for _ in range(MAX_SLUG_ATTEMPTS):
        slug = generate_slug(data.title)
        if db.query(Event.id).filter(Event.slug == slug).first():
            continue

        event = Event(
            user_id=profile.id,
            title=data.title,
            date=data.date,
            category=data.category,
            cover_image=data.cover_image,
            welcome_message=data.welcome_message,
            spotify_url=data.spotify_url,
            slug=slug,
            package=profile.tier,
            storage_used=0,
            is_expired=False,
            created_at=now,
            expires_at=now + timedelta(days=settings.event_lifetime_days)
        )
        db.add(event)
        try:
            db.commit()
        except IntegrityError:
            # lost a race for the same slug
            db.rollback()
            logger.warning(f"Slug collision on insert ({slug}), retrying")
            continue

        db.refresh(event)
        logger.info(f"Event created: {event.slug} (owner={profile.id}, package={event.package.value})")
        return event

    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Could not generate a unique event link, please try again"
    )

def delete_event(db: Session, event: Event, storage: StorageProvider) -> None:
    """Delete an event, its memories and (best-effort) their blobs"""
    slug = event.slug
    paths = [memory.storage_path for memory in event.memories]

    db.delete(event)
    db.commit()

    for path in paths:
        delete_quietly(storage, path)

    logger.info(f"Event deleted: {slug} ({len(paths)} memories)")
