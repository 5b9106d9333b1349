# app/api/v1/routes/investments.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from app.schemas.investment import InvestmentCreate, InvestmentRead, InvestmentUpdate
from app.crud.investment import (
    create_investment_for_user,
    delete_investment,
    get_investment_by_id,
    get_investments_for_user,
    update_investment,
)
from app.core.database import get_async_session
from app.core.auth import User
from app.models.investment import InvestmentType
from app.api.deps import get_current_user

router = APIRouter(prefix="/investments", tags=["Investments"])

@router.get("", response_model=List[InvestmentRead])
async def read_investments(
    type: Optional[InvestmentType] = Query(None, description="Only holdings of this instrument type"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_investments_for_user(user.id, db, investment_type=type)

@router.post("", response_model=InvestmentRead, status_code=status.HTTP_201_CREATED)
async def create_investment(
    inv_in: InvestmentCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_investment_for_user(user.id, inv_in, db)

@router.put("/{investment_id}", response_model=InvestmentRead)
async def update_investment_endpoint(
    investment_id: uuid.UUID,
    inv_in: InvestmentUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    investment = await get_investment_by_id(investment_id, user.id, db)
    if not investment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Investment not found")
    return await update_investment(investment, inv_in, db)

@router.delete("/{investment_id}")
async def delete_investment_endpoint(
    investment_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    investment = await get_investment_by_id(investment_id, user.id, db)
    if not investment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Investment not found")
    await delete_investment(investment, db)
    return {"message": "Investment deleted"}
