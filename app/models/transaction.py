# app/models/transaction.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Enum, Uuid, Index
from sqlalchemy.orm import relationship
from app.core.database import Base

class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(length=100), nullable=False)
    name = Column(String(length=150), nullable=True)
    description = Column(String(length=255), nullable=True)
    status = Column(String(length=30), nullable=False, default="Completed")
    date = Column(DateTime, nullable=False, default=datetime.utcnow)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.date} user_id={self.user_id}>"
