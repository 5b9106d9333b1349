# app/schemas/goal.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from app.models.goal import GoalStatus
from app.utils.dates import to_naive_utc

class GoalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    target_amount: float = Field(..., ge=0)
    current_amount: float = Field(0.0, ge=0)
    deadline: Optional[datetime] = None
    category: str = Field(..., min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    status: GoalStatus = GoalStatus.active

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    target_amount: Optional[float] = Field(None, ge=0)
    current_amount: Optional[float] = Field(None, ge=0)
    deadline: Optional[datetime] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    status: Optional[GoalStatus] = None

    class Config:
        extra = "forbid"

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class GoalAddFunds(BaseModel):
    amount: float = Field(..., gt=0, description="Amount must be a positive number")

class GoalRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    target_amount: float
    current_amount: float
    deadline: datetime
    category: str
    icon: str
    color: str
    status: GoalStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
