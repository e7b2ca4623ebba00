# app/api/routes/host.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from typing import List

from app.database import get_db
from app.models.event import Event
from app.models.profile import Profile
from app.schemas.event import EventCreate, EventResponse, EventWithMemories, MessageResponse
from app.schemas.memory import MemoryResponse, MemoryModerate
from app.schemas.profile import ProfileRegister, ProfileResponse
from app.api.deps import get_current_user, get_profile
from app.core.permissions import ensure_can_manage
from app.core.logger import logger
from app.services import event_service, memory_service, quota_service
from app.services.identity_service import AuthUser
from app.services.storage_service import StorageProvider, get_storage

router = APIRouter(prefix="/api/host", tags=["host"])

# ===== Profile =====

@router.post("/register-profile", response_model=ProfileResponse)
def register_profile(
    response: Response,
    data: ProfileRegister | None = None,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create the caller's profile once; later calls return it unchanged"""
    existing = get_profile(db, current_user)
    if existing:
        return existing

    email = (data.email if data else None) or current_user.email
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is required"
        )

    profile = Profile(id=current_user.id, email=email)
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent first call registered it
        db.rollback()
        return get_profile(db, current_user)
    db.refresh(profile)

    logger.info(f"Profile registered: {profile.email} ({profile.id})")
    response.status_code = status.HTTP_201_CREATED
    return profile

@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Caller's profile"""
    profile = get_profile(db, current_user)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile

# ===== Events =====

@router.get("/events", response_model=List[EventWithMemories])
def list_events(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Caller's events (admins see every event), newest date first"""
    profile = get_profile(db, current_user)

    query = db.query(Event).options(selectinload(Event.memories))
    if not (profile and profile.is_admin):
        query = query.filter(Event.user_id == current_user.id)

    return query.order_by(Event.date.desc()).all()

@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an event"""
    profile = get_profile(db, current_user)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found. Register your profile first."
        )

    quota_service.check_event_limit(db, profile)

    return event_service.create_event(db, profile, data)

@router.get("/events/{event_id}", response_model=EventWithMemories)
def get_event(
    event_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """One event with all of its memories"""
    event = event_service.get_event_by_id(db, event_id)
    ensure_can_manage(get_profile(db, current_user), current_user.id, event.user_id)
    return event

@router.delete("/events/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage)
):
    """Delete an event with its memories"""
    event = event_service.get_event_by_id(db, event_id)
    ensure_can_manage(get_profile(db, current_user), current_user.id, event.user_id)

    event_service.delete_event(db, event, storage)

    return MessageResponse(message="Event deleted")

@router.get("/events/{event_id}/memories", response_model=List[MemoryResponse])
def list_event_memories(
    event_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Every memory of the event, approved or not"""
    event = event_service.get_event_by_id(db, event_id)
    ensure_can_manage(get_profile(db, current_user), current_user.id, event.user_id)

    return memory_service.get_event_memories(db, event)

# ===== Moderation =====

@router.patch("/memories/{memory_id}", response_model=MemoryResponse)
def moderate_memory(
    memory_id: str,
    data: MemoryModerate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Approve or reject a memory"""
    memory = memory_service.get_memory(db, memory_id)
    event = event_service.get_event_by_id(db, memory.event_id)
    ensure_can_manage(get_profile(db, current_user), current_user.id, event.user_id)

    return memory_service.set_approval(db, memory, data.is_approved)

@router.delete("/memories/{memory_id}", response_model=MessageResponse)
def delete_memory(
    memory_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage)
):
    """Delete a memory and its stored file"""
    memory = memory_service.get_memory(db, memory_id)
    event = event_service.get_event_by_id(db, memory.event_id)
    ensure_can_manage(get_profile(db, current_user), current_user.id, event.user_id)

    memory_service.delete_memory(db, memory, storage)

    return MessageResponse(message="Memory deleted")
