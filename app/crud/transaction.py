# app/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc, func
from app.models.transaction import Transaction, TransactionType
from typing import List, Optional, Dict, Any
from datetime import datetime
import uuid
from app.schemas.transaction import TransactionCreate, TransactionUpdate

# Columns a client may change on an existing transaction
UPDATABLE_FIELDS = frozenset({"type", "amount", "category", "name", "description", "date"})

async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    tx_type: Optional[TransactionType] = None,
    category: Optional[str] = None,
) -> List[Transaction]:
    """Owner-scoped transactions, newest first. Date bounds are inclusive."""
    query = select(Transaction).where(Transaction.user_id == user_id)
    if start_date is not None:
        query = query.where(Transaction.date >= start_date)
    if end_date is not None:
        query = query.where(Transaction.date <= end_date)
    if tx_type is not None:
        query = query.where(Transaction.type == tx_type)
    if category:
        query = query.where(Transaction.category == category)
    result = await db.execute(query.order_by(desc(Transaction.date)))
    return result.scalars().all()

async def get_expenses_between(
    user_id: uuid.UUID,
    db: AsyncSession,
    start: Optional[datetime] = None,
    end_exclusive: Optional[datetime] = None,
) -> List[Transaction]:
    query = select(Transaction).where(
        Transaction.user_id == user_id,
        Transaction.type == TransactionType.expense,
    )
    if start is not None:
        query = query.where(Transaction.date >= start)
    if end_exclusive is not None:
        query = query.where(Transaction.date < end_exclusive)
    result = await db.execute(query.order_by(Transaction.date))
    return result.scalars().all()

async def count_transactions_for_user(user_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Transaction).where(Transaction.user_id == user_id)
    )
    return result.scalar_one() or 0

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    data = tx_in.model_dump(exclude_none=True)
    new_tx = Transaction(**data, user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    for field, value in tx_in.model_dump(exclude_unset=True).items():
        if field not in UPDATABLE_FIELDS:
            continue
        if value is None and field in ("type", "amount", "category", "date"):
            continue
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()


def sample_transactions(now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Demo data: one month of income and expenses plus three earlier months of expenses."""
    now = now or datetime.utcnow()

    def day(months_back: int, day_of_month: int) -> datetime:
        index = now.year * 12 + (now.month - 1) - months_back
        return datetime(index // 12, index % 12 + 1, day_of_month)

    rows = [
        ("income", 50000, "Salary", "Monthly salary", day(0, 1)),
        ("income", 5000, "Freelance", "Client payment", day(0, 15)),
        ("expense", 15000, "Housing", "Rent payment", day(0, 5)),
        ("expense", 5000, "Food", "Groceries", day(0, 10)),
        ("expense", 3000, "Food", "Restaurant", day(0, 12)),
        ("expense", 2500, "Transport", "Gas/fuel", day(0, 8)),
        ("expense", 2000, "Shopping", "Clothing", day(0, 18)),
        ("expense", 1500, "Entertainment", "Movies & games", day(0, 20)),
        ("expense", 8000, "Utilities", "Electricity & water", day(0, 25)),
        ("expense", 3000, "Healthcare", "Medicine", day(0, 22)),
        ("expense", 12000, "Housing", "Rent payment", day(1, 5)),
        ("expense", 4500, "Food", "Groceries", day(1, 10)),
        ("expense", 2800, "Transport", "Gas/fuel", day(1, 8)),
        ("expense", 10000, "Housing", "Rent payment", day(2, 5)),
        ("expense", 4000, "Food", "Groceries", day(2, 10)),
        ("expense", 3500, "Transport", "Gas/fuel", day(2, 8)),
        ("expense", 14000, "Housing", "Rent payment", day(3, 5)),
        ("expense", 5000, "Food", "Groceries", day(3, 10)),
        ("expense", 3000, "Transport", "Gas/fuel", day(3, 8)),
    ]
    return [
        {
            "type": TransactionType(tx_type),
            "amount": float(amount),
            "category": category,
            "description": description,
            "name": description,
            "date": date,
        }
        for tx_type, amount, category, description, date in rows
    ]

async def seed_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    replace_existing: bool = True,
) -> List[Transaction]:
    if replace_existing:
        await db.execute(delete(Transaction).where(Transaction.user_id == user_id))
    new_instances = [Transaction(**row, user_id=user_id) for row in sample_transactions()]
    db.add_all(new_instances)
    await db.commit()
    return new_instances
