# app/services/quota_service.py
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.profile import Profile, Tier
from app.models.event import Event
from app.models.memory import Memory

MB = 1024 * 1024
GB = 1024 * MB

# Per-event limits by package. None means unbounded.
TIER_LIMITS = {
    Tier.BASIC: {"max_uploads": 20, "max_storage": 100 * MB},
    Tier.PREMIUM: {"max_uploads": 100, "max_storage": 500 * MB},
    Tier.VIP: {"max_uploads": None, "max_storage": 2 * GB},
}

# Events a host may own, by tier
MAX_EVENTS = {
    Tier.BASIC: 1,
    Tier.PREMIUM: None,
    Tier.VIP: None,
}

def get_limits(tier: Tier) -> dict:
    return TIER_LIMITS[Tier(tier)]

def check_event_limit(db: Session, profile: Profile) -> None:
    """
    Event creation limit
    - BASIC: one event
    - PREMIUM / VIP: no cap
    """
    max_events = MAX_EVENTS[Tier(profile.tier)]
    if max_events is None:
        return

    owned = db.query(Event).filter(Event.user_id == profile.id).count()
    if owned >= max_events:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{profile.tier.value} tier allows {max_events} event(s). Upgrade to create more."
        )

def check_upload_limits(db: Session, event: Event, incoming_size: int) -> None:
    """Raise 403 if one more upload of incoming_size would break the event's package limits"""
    limits = get_limits(event.package)

    max_uploads = limits["max_uploads"]
    if max_uploads is not None:
        upload_count = db.query(Memory).filter(Memory.event_id == event.id).count()
        if upload_count >= max_uploads:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Upload limit reached for {event.package.value} tier."
            )

    if (event.storage_used or 0) + incoming_size > limits["max_storage"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Storage limit reached for {event.package.value} tier."
        )
