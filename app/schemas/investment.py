# app/schemas/investment.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from app.models.investment import InvestmentType
from app.utils.dates import to_naive_utc

class InvestmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    type: InvestmentType
    invested_amount: float = Field(..., ge=0)
    current_value: float = Field(0.0, ge=0)
    purchase_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("purchase_date")
    @classmethod
    def purchase_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class InvestmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    type: Optional[InvestmentType] = None
    invested_amount: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    purchase_date: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator("purchase_date")
    @classmethod
    def purchase_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class InvestmentRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    type: InvestmentType
    invested_amount: float
    current_value: float
    purchase_date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
