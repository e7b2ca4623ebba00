# app/schemas/memory.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime

from app.models.memory import MemoryType

class MemoryResponse(BaseModel):
    """Memory response"""
    id: str
    event_id: str
    type: MemoryType
    storage_path: str
    original_text: str | None = None
    ai_story: str | None = None
    is_approved: bool
    file_size: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class MemoryModerate(BaseModel):
    """Approve/reject request"""
    is_approved: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class UploadResponse(BaseModel):
    """Guest upload response"""
    message: str
    story: str
