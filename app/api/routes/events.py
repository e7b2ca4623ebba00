# app/api/routes/events.py
from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.schemas.event import PublicEventResponse
from app.schemas.memory import MemoryResponse, UploadResponse
from app.core.file_security import validate_mime_type
from app.core.logger import logger
from app.services import event_service, memory_service
from app.services.storage_service import StorageProvider, get_storage

router = APIRouter(prefix="/api/events", tags=["guest"])

@router.get("/{slug}", response_model=PublicEventResponse)
def get_event(slug: str, db: Session = Depends(get_db)):
    """Public event details (no auth)"""
    event = event_service.get_event_by_slug(db, slug)
    event_service.ensure_not_expired(event)
    return event

@router.get("/{slug}/memories", response_model=List[MemoryResponse])
def get_gallery(slug: str, db: Session = Depends(get_db)):
    """Approved memories for the public gallery"""
    event = event_service.get_event_by_slug(db, slug)
    return memory_service.get_approved_memories(db, event)

@router.post("/{slug}/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_memory(
    slug: str,
    photo: UploadFile | None = File(None),
    memory: str = Form(""),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage)
):
    """Guest upload: one file plus an optional caption"""

    if photo is None or not photo.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No photo uploaded"
        )
    validate_mime_type(photo)

    event = event_service.get_event_by_slug(db, slug)
    event_service.ensure_not_expired(event)

    content = photo.file.read()
    caption = memory.strip()

    saved = memory_service.save_guest_upload(
        db,
        event,
        storage,
        content=content,
        filename=photo.filename,
        content_type=photo.content_type,
        caption=caption
    )
    logger.info(f"Memory {saved.id} captured for event {event.slug}")

    return UploadResponse(
        message="Memory captured successfully!",
        story=saved.ai_story or ""
    )
