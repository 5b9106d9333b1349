# app/schemas/transaction.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from app.models.transaction import TransactionType
from app.utils.dates import to_naive_utc

class TransactionBase(BaseModel):
    type: TransactionType
    amount: float = Field(..., ge=0, description="Amount must be a positive number")
    category: str = Field(..., min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=150)
    description: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = Field(None, description="ISO 8601 date/time of transaction")

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category is required")
        return value

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=150)
    description: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = None

    class Config:
        extra = "forbid"

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Category cannot be empty")
        return value

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class TransactionRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: TransactionType
    amount: float
    category: str
    name: Optional[str] = None
    description: Optional[str] = None
    status: str
    date: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
