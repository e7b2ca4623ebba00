# app/models/memory.py
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from datetime import datetime, timezone
import uuid
import enum

class MemoryType(str, enum.Enum):
    """Kind of guest submission"""
    PHOTO = "photo"
    VIDEO = "video"
    STORY = "story"

class Memory(Base):
    """Guest-submitted memory"""
    __tablename__ = "memories"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(SQLEnum(MemoryType, values_callable=lambda e: [m.value for m in e]), default=MemoryType.PHOTO, nullable=False)
    storage_path = Column(String, nullable=False)
    file_size = Column(BigInteger, nullable=False)  # bytes

    # caption
    original_text = Column(Text, nullable=True)
    ai_story = Column(Text, nullable=True)

    # moderation
    is_approved = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now(), index=True)

    event = relationship("Event", back_populates="memories")

    def __repr__(self):
        return f"<Memory {self.id} ({self.type}) for Event {self.event_id}>"
