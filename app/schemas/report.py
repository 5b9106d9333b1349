# app/schemas/report.py
from typing import Dict, List
from pydantic import BaseModel

class SummaryReport(BaseModel):
    income: float
    expenses: float
    balance: float
    category_breakdown: Dict[str, float]
    transaction_count: int

class CategoryShare(BaseModel):
    category: str
    amount: float
    count: int
    percentage: int

class CategoryReport(BaseModel):
    categories: List[CategoryShare]
    total: float

class MonthlySpend(BaseModel):
    month: str
    label: str
    actual: float
    budget: float

class InvestmentTypeTotals(BaseModel):
    count: int
    invested: float
    current_value: float

class InvestmentReport(BaseModel):
    total_invested: float
    total_current_value: float
    total_returns: float
    by_type: Dict[str, InvestmentTypeTotals]
    investment_count: int
