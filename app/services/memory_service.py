# app/services/memory_service.py
import time

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.file_security import sanitize_filename
from app.core.logger import logger
from app.models.event import Event
from app.models.memory import Memory, MemoryType
from app.services import ai_service, quota_service
from app.services.storage_service import StorageProvider, delete_quietly

PUBLIC_GALLERY_LIMIT = 50

def build_storage_path(event_id: str, filename: str | None) -> str:
    """events/{event_id}/{timestamp_ms}-{filename}"""
    return f"events/{event_id}/{int(time.time() * 1000)}-{sanitize_filename(filename)}"

def memory_type_for(content_type: str | None) -> MemoryType:
    if content_type and content_type.startswith("video/"):
        return MemoryType.VIDEO
    return MemoryType.PHOTO

def save_guest_upload(
    db: Session,
    event: Event,
    storage: StorageProvider,
    content: bytes,
    filename: str | None,
    content_type: str | None,
    caption: str
) -> Memory:
    """
    Store a guest upload: quota checks, blob upload, AI story, then one
    transaction that re-checks quotas under a row lock, inserts the memory
    and bumps the event's storage counter.
    """
    file_size = len(content)

    # reject before touching storage
    quota_service.check_upload_limits(db, event, file_size)

    storage_path = build_storage_path(event.id, filename)
    storage.upload_file(content, storage_path, content_type)
    logger.info(f"Stored upload: {storage_path} ({file_size} bytes)")

    ai_story = ai_service.rewrite_memory(caption, content, content_type)

    try:
        locked_event = db.query(Event)\
            .filter(Event.id == event.id)\
            .with_for_update()\
            .populate_existing()\
            .one()

        # another upload may have committed since the first check
        quota_service.check_upload_limits(db, locked_event, file_size)

        memory = Memory(
            event_id=locked_event.id,
            type=memory_type_for(content_type),
            storage_path=storage_path,
            original_text=caption,
            ai_story=ai_story,
            file_size=file_size,
            is_approved=False
        )
        db.add(memory)
        locked_event.storage_used = (locked_event.storage_used or 0) + file_size
        db.commit()
    except (HTTPException, SQLAlchemyError):
        db.rollback()
        delete_quietly(storage, storage_path)
        raise

    db.refresh(memory)
    return memory

def get_approved_memories(db: Session, event: Event) -> list[Memory]:
    """Public gallery: most recent approved memories"""
    return db.query(Memory)\
        .filter(Memory.event_id == event.id, Memory.is_approved == True)\
        .order_by(Memory.created_at.desc())\
        .limit(PUBLIC_GALLERY_LIMIT)\
        .all()

def get_event_memories(db: Session, event: Event) -> list[Memory]:
    """All memories of an event, newest first"""
    return db.query(Memory)\
        .filter(Memory.event_id == event.id)\
        .order_by(Memory.created_at.desc())\
        .all()

def get_memory(db: Session, memory_id: str) -> Memory:
    memory = db.query(Memory).filter(Memory.id == memory_id).first()
    if not memory:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Memory not found"
        )
    return memory

def set_approval(db: Session, memory: Memory, is_approved: bool) -> Memory:
    memory.is_approved = is_approved
    db.commit()
    db.refresh(memory)
    logger.info(f"Memory {memory.id} {'approved' if is_approved else 'rejected'}")
    return memory

def delete_memory(db: Session, memory: Memory, storage: StorageProvider) -> None:
    """Remove the row and give back its bytes; the blob delete is best-effort"""
    storage_path = memory.storage_path

    event = memory.event
    if event is not None:
        event.storage_used = max(0, (event.storage_used or 0) - (memory.file_size or 0))

    db.delete(memory)
    db.commit()

    delete_quietly(storage, storage_path)
