# app/utils/reports.py
"""
Report calculations over transactions and investments that were already
loaded for a single user. Nothing in here talks to the database; routes fetch
the rows and hand them over.
"""
import math
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.models.transaction import TransactionType

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _round_half_up(value: float) -> int:
    # round() does banker's rounding; percentages use half-up
    return int(math.floor(value + 0.5))


def _is_type(tx: Any, tx_type: TransactionType) -> bool:
    return tx.type == tx_type or tx.type == tx_type.value


# ────────────────────────────────────────────────────────────────────────────────
# SUMMARY
# ────────────────────────────────────────────────────────────────────────────────
def summarize_transactions(transactions: Iterable[Any]) -> Dict[str, Any]:
    """
    Income/expense totals, balance and per-category expense breakdown.

    Income transactions never appear in the category breakdown.
    """
    income = 0.0
    expenses = 0.0
    category_breakdown: Dict[str, float] = {}
    count = 0

    for tx in transactions:
        count += 1
        if _is_type(tx, TransactionType.income):
            income += tx.amount
        elif _is_type(tx, TransactionType.expense):
            expenses += tx.amount
            category_breakdown[tx.category] = category_breakdown.get(tx.category, 0.0) + tx.amount

    return {
        "income": income,
        "expenses": expenses,
        "balance": income - expenses,
        "category_breakdown": category_breakdown,
        "transaction_count": count,
    }


# ────────────────────────────────────────────────────────────────────────────────
# CATEGORY REPORT
# ────────────────────────────────────────────────────────────────────────────────
def category_report(transactions: Iterable[Any]) -> Dict[str, Any]:
    """
    Expense amount, count and share of total per category.

    Percentages are rounded independently, so they may add up to 99 or 101.
    With no expenses at all every percentage is 0.
    """
    amounts: Dict[str, float] = {}
    counts: Dict[str, int] = defaultdict(int)

    for tx in transactions:
        if not _is_type(tx, TransactionType.expense):
            continue
        amounts[tx.category] = amounts.get(tx.category, 0.0) + tx.amount
        counts[tx.category] += 1

    total = sum(amounts.values())

    categories = [
        {
            "category": category,
            "amount": amount,
            "count": counts[category],
            "percentage": _round_half_up(amount / total * 100) if total > 0 else 0,
        }
        for category, amount in amounts.items()
    ]

    return {"categories": categories, "total": total}


# ────────────────────────────────────────────────────────────────────────────────
# MONTHLY SERIES
# ────────────────────────────────────────────────────────────────────────────────
def month_label(month: int, year: int) -> str:
    return f"{MONTH_NAMES[month - 1]}'{year % 100:02d}"


def trailing_months(months: int, today: Optional[date] = None) -> List[Tuple[int, int]]:
    """(year, month) pairs of the window, oldest first, ending at today's month."""
    today = today or datetime.now().date()
    window = []
    for offset in range(months - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        window.append((index // 12, index % 12 + 1))
    return window


def trailing_window_start(months: int, today: Optional[date] = None) -> datetime:
    year, month = trailing_months(months, today)[0]
    return datetime(year, month, 1)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First instant of the month and first instant of the following month."""
    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def monthly_series(
    transactions: Iterable[Any],
    months: int = 6,
    today: Optional[date] = None,
    budget: float = 10000.0,
) -> List[Dict[str, Any]]:
    """
    Expense totals per calendar month over the trailing window.

    Months without any spending are left out rather than reported as zero,
    so an empty window gives an empty list.
    """
    spent: Dict[Tuple[int, int], float] = defaultdict(float)
    for tx in transactions:
        if not _is_type(tx, TransactionType.expense):
            continue
        # Bucket on (month, two-digit year); the day is irrelevant
        spent[(tx.date.year % 100, tx.date.month)] += tx.amount

    series = []
    for year, month in trailing_months(months, today):
        actual = spent.get((year % 100, month), 0.0)
        if actual > 0:
            series.append({
                "month": MONTH_NAMES[month - 1],
                "label": month_label(month, year),
                "actual": actual,
                "budget": budget,
            })
    return series


# ────────────────────────────────────────────────────────────────────────────────
# INVESTMENTS
# ────────────────────────────────────────────────────────────────────────────────
def investment_rollup(investments: Iterable[Any], investment_type: Optional[str] = None) -> Dict[str, Any]:
    total_invested = 0.0
    total_current_value = 0.0
    by_type: Dict[str, Dict[str, Any]] = {}
    count = 0

    for inv in investments:
        inv_type = getattr(inv.type, "value", inv.type)
        if investment_type and inv_type != investment_type:
            continue
        current_value = inv.current_value or 0.0
        count += 1
        total_invested += inv.invested_amount
        total_current_value += current_value

        bucket = by_type.setdefault(inv_type, {"count": 0, "invested": 0.0, "current_value": 0.0})
        bucket["count"] += 1
        bucket["invested"] += inv.invested_amount
        bucket["current_value"] += current_value

    return {
        "total_invested": total_invested,
        "total_current_value": total_current_value,
        "total_returns": total_current_value - total_invested,
        "by_type": by_type,
        "investment_count": count,
    }
