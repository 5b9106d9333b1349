# app/crud/investment.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from app.models.investment import Investment, InvestmentType
from typing import List, Optional
import uuid
from app.schemas.investment import InvestmentCreate, InvestmentUpdate

UPDATABLE_FIELDS = frozenset({"name", "type", "invested_amount", "current_value", "purchase_date", "notes"})
NON_NULLABLE_FIELDS = frozenset({"name", "type", "invested_amount", "current_value", "purchase_date"})

async def get_investments_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    investment_type: Optional[InvestmentType] = None,
) -> List[Investment]:
    query = select(Investment).where(Investment.user_id == user_id)
    if investment_type is not None:
        query = query.where(Investment.type == investment_type)
    result = await db.execute(query.order_by(desc(Investment.purchase_date)))
    return result.scalars().all()

async def get_investment_by_id(investment_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Investment]:
    result = await db.execute(
        select(Investment).where(Investment.id == investment_id, Investment.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_investment_for_user(user_id: uuid.UUID, inv_in: InvestmentCreate, db: AsyncSession) -> Investment:
    new_inv = Investment(**inv_in.model_dump(exclude_none=True), user_id=user_id)
    db.add(new_inv)
    await db.commit()
    await db.refresh(new_inv)
    return new_inv

async def update_investment(investment: Investment, inv_in: InvestmentUpdate, db: AsyncSession) -> Investment:
    for field, value in inv_in.model_dump(exclude_unset=True).items():
        if field not in UPDATABLE_FIELDS:
            continue
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(investment, field, value)
    db.add(investment)
    await db.commit()
    await db.refresh(investment)
    return investment

async def delete_investment(investment: Investment, db: AsyncSession) -> None:
    await db.delete(investment)
    await db.commit()
