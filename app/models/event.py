# app/models/event.py
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.profile import Tier
from datetime import datetime, timezone
import uuid
import enum

class EventCategory(str, enum.Enum):
    """Kind of gathering"""
    WEDDING = "wedding"
    BAPTISM = "baptism"
    PARTY = "party"
    OTHER = "other"

class Event(Base):
    """Event model"""
    __tablename__ = "events"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    # details
    title = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    cover_image = Column(String, nullable=True)
    welcome_message = Column(Text, nullable=True)
    spotify_url = Column(String, nullable=True)  # background music
    category = Column(SQLEnum(EventCategory, values_callable=lambda e: [m.value for m in e]), default=EventCategory.OTHER, nullable=False)

    # guest access
    slug = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String, nullable=True)  # stored, not enforced

    # package & quota
    package = Column(SQLEnum(Tier), default=Tier.BASIC, nullable=False)
    storage_used = Column(BigInteger, default=0, nullable=False)  # bytes

    # expiry
    is_expired = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now())

    owner = relationship("Profile", back_populates="events")
    memories = relationship(
        "Memory",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Memory.created_at.desc()"
    )

    def has_expired(self) -> bool:
        """Expired by flag or by date"""
        if self.is_expired:
            return True
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            # SQLite drops the offset; values are stored as UTC
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) > expires_at

    def __repr__(self):
        return f"<Event {self.slug}>"
