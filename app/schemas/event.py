# app/schemas/event.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional

from app.models.event import EventCategory
from app.models.profile import Tier
from app.schemas.memory import MemoryResponse

class EventCreate(BaseModel):
    """Event creation request"""
    title: str = Field(..., min_length=1, max_length=200)
    date: datetime
    category: EventCategory = EventCategory.OTHER
    cover_image: Optional[str] = None
    welcome_message: Optional[str] = None
    spotify_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class EventResponse(BaseModel):
    """Host-facing event"""
    id: str
    user_id: str
    title: str
    date: datetime
    cover_image: Optional[str] = None
    welcome_message: Optional[str] = None
    spotify_url: Optional[str] = None
    slug: str
    category: EventCategory
    package: Tier
    storage_used: int
    is_expired: bool
    expires_at: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class EventWithMemories(EventResponse):
    """Host-facing event with its memories"""
    memories: List[MemoryResponse] = []

class PublicEventResponse(BaseModel):
    """Guest-facing event details"""
    id: str
    title: str
    welcome_message: Optional[str] = None
    cover_image: Optional[str] = None
    date: datetime
    spotify_url: Optional[str] = None
    category: EventCategory

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class MessageResponse(BaseModel):
    message: str
