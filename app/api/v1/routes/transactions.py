# app/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import datetime
import uuid

from app.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from app.crud.transaction import (
    create_transaction_for_user,
    get_transactions_for_user,
    get_transaction_by_id,
    update_transaction,
    delete_transaction,
    seed_transactions_for_user,
)
from app.core.database import get_async_session
from app.core.auth import User
from app.models.transaction import TransactionType
from app.utils.dates import to_naive_utc
from app.api.deps import get_current_user

router = APIRouter(prefix="/transactions", tags=["Transactions"])

@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    start_date: Optional[datetime] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[datetime] = Query(None, description="Inclusive upper bound"),
    type: Optional[TransactionType] = Query(None),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_transactions_for_user(
        user.id, db,
        start_date=to_naive_utc(start_date),
        end_date=to_naive_utc(end_date),
        tx_type=type,
        category=category,
    )

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_transaction_for_user(user.id, tx_in, db)

@router.post("/seed")
async def seed_transactions(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Replace the user's transactions with a sample data set"""
    created = await seed_transactions_for_user(user.id, db)
    return {"message": "Sample data seeded successfully", "count": len(created)}

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return await update_transaction(tx, tx_in, db)

@router.delete("/{transaction_id}")
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await delete_transaction(tx, db)
    return {"message": "Transaction deleted"}
