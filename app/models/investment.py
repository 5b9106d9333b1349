# app/models/investment.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum, Text, Uuid, Index
from sqlalchemy.orm import relationship
from app.core.database import Base

class InvestmentType(str, enum.Enum):
    stock = "stock"
    mutual_fund = "mutual_fund"
    fd = "fd"
    ppf = "ppf"
    nps = "nps"
    gold = "gold"
    real_estate = "real_estate"
    crypto = "crypto"
    other = "other"

class Investment(Base):
    __tablename__ = "investments"
    __table_args__ = (
        Index("ix_investments_user_type", "user_id", "type"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(length=150), nullable=False)
    type = Column(Enum(InvestmentType), nullable=False)
    invested_amount = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False, default=0.0)
    purchase_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="investments")

    def __repr__(self):
        return f"<Investment name={self.name} type={self.type} invested={self.invested_amount}>"
