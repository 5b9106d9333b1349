import enum
import uuid
from sqlalchemy import Column, String, ForeignKey, Boolean, DateTime, Enum, Uuid, Index
from sqlalchemy.orm import relationship
from app.core.database import Base
from datetime import datetime

class NotificationType(str, enum.Enum):
    transaction = "transaction"
    budget = "budget"
    goal = "goal"
    investment = "investment"
    system = "system"

class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
        Index("ix_notifications_user_read", "user_id", "is_read"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    type = Column(Enum(NotificationType), nullable=False, default=NotificationType.system)
    link = Column(String, nullable=False, default="")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="notifications")
