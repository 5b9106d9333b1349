# app/models/goal.py
import enum
import uuid
from datetime import datetime, timedelta
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum, Uuid, Index
from sqlalchemy.orm import relationship
from app.core.database import Base

class GoalStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"

def default_deadline() -> datetime:
    return datetime.utcnow() + timedelta(days=365)

class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        Index("ix_goals_user_status", "user_id", "status"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(length=150), nullable=False)
    target_amount = Column(Float, nullable=False)
    # Running balance; deposits go through add_funds_to_goal
    current_amount = Column(Float, nullable=False, default=0.0)
    deadline = Column(DateTime, nullable=False, default=default_deadline)
    category = Column(String(length=100), nullable=False, default="Other")
    icon = Column(String(length=50), nullable=False, default="🎯")
    color = Column(String(length=50), nullable=False, default="bg-primary")
    status = Column(Enum(GoalStatus), nullable=False, default=GoalStatus.active)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="goals")

    def __repr__(self):
        return f"<Goal name={self.name} target={self.target_amount} current={self.current_amount} status={self.status}>"
