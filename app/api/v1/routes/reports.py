# app/api/v1/routes/reports.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import datetime

from app.core.config import settings
from app.core.database import get_async_session
from app.core.auth import User
from app.crud.investment import get_investments_for_user
from app.crud.transaction import get_expenses_between, get_transactions_for_user
from app.models.investment import InvestmentType
from app.schemas.report import CategoryReport, InvestmentReport, MonthlySpend, SummaryReport
from app.utils.reports import (
    category_report,
    investment_rollup,
    month_bounds,
    monthly_series,
    summarize_transactions,
    trailing_window_start,
)
from app.utils.dates import to_naive_utc
from app.api.deps import get_current_user

router = APIRouter(prefix="/reports", tags=["Reports"])

@router.get("/summary", response_model=SummaryReport)
async def get_summary(
    start_date: Optional[datetime] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[datetime] = Query(None, description="Inclusive upper bound"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Income, expenses, balance and expense breakdown by category"""
    transactions = await get_transactions_for_user(
        user.id, db,
        start_date=to_naive_utc(start_date),
        end_date=to_naive_utc(end_date),
    )
    return summarize_transactions(transactions)

@router.get("/investments", response_model=InvestmentReport)
async def get_investment_summary(
    type: Optional[InvestmentType] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Invested amount, current value and returns, overall and per instrument type"""
    investments = await get_investments_for_user(user.id, db, investment_type=type)
    return investment_rollup(investments)

@router.get("/monthly", response_model=List[MonthlySpend])
async def get_monthly_spending(
    months: int = Query(settings.REPORT_MONTHS_DEFAULT, ge=1, le=24),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Expense totals for the last `months` calendar months, oldest first.
    Months without spending are not listed.
    """
    today = datetime.now().date()
    expenses = await get_expenses_between(user.id, db, start=trailing_window_start(months, today))
    return monthly_series(expenses, months=months, today=today, budget=settings.DEFAULT_MONTHLY_BUDGET)

@router.get("/categories", response_model=CategoryReport)
async def get_category_breakdown(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="Calendar month as YYYY-MM"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Expense amount, count and percentage per category"""
    start = end = None
    if month:
        year, month_number = (int(part) for part in month.split("-"))
        try:
            start, end = month_bounds(year, month_number)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid month")
    expenses = await get_expenses_between(user.id, db, start=start, end_exclusive=end)
    return category_report(expenses)
