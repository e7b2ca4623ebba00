# app/models/profile.py
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class Role(str, enum.Enum):
    """Profile role"""
    HOST = "host"
    ADMIN = "admin"

class Tier(str, enum.Enum):
    """Subscription package"""
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    VIP = "VIP"

class Profile(Base):
    """Host/admin profile, keyed by the identity provider's user id"""
    __tablename__ = "profiles"

    id = Column(String, primary_key=True)  # identity provider user id
    email = Column(String, nullable=False, index=True)

    role = Column(SQLEnum(Role, values_callable=lambda e: [m.value for m in e]), default=Role.HOST, nullable=False)
    tier = Column(SQLEnum(Tier), default=Tier.BASIC, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    events = relationship("Event", back_populates="owner")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self):
        return f"<Profile {self.email} ({self.role}, {self.tier})>"
