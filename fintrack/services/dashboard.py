# fintrack/services/dashboard.py
"""
Dashboard aggregation: turns a user's ledger into monthly figures.

Blocks:
  1. Summary (income, expense, balance) for one period
  2. Recent transactions (latest N overall, not period-scoped)
  3. Expense breakdown by category with percentage shares
  4. Budget vs. actual for the period's budgets, with ok/warning/over state

The pure functions (summarize, breakdown_expenses, track_budgets, ...) do
the math on rows already fetched; the fetch_* functions are the only
store reads. build_dashboard issues those reads one after another in the
same session without a surrounding read transaction.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from sqlmodel import Session, select

from fintrack.db import store_access
from fintrack.models import Budget, Category, Transaction, TxnType
from fintrack.periods import Period, month_year_range, ym_from_date
from fintrack.schemas import (
    BudgetProgress,
    BudgetState,
    CategoryExpense,
    Dashboard,
    LedgerSummary,
    MonthlyReport,
    MonthlyTotals,
    ReportCategory,
)
from fintrack.services.budgets import BudgetRow, list_budgets
from fintrack.services.categories import categories_by_id
from fintrack.services.criteria import budget_criteria, transaction_criteria
from fintrack.services.transactions import TxnRow, transaction_out

logger = logging.getLogger("fintrack.dashboard")

UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_COLOR = "#000000"

WARNING_THRESHOLD = 90.0  # percent; strictly above -> warning
OVER_THRESHOLD = 100.0  # percent; strictly above -> over


# ------------------------------------------------------------------
# Store reads
# ------------------------------------------------------------------


def fetch_period_transactions(
    session: Session, user_id: int, period: Period
) -> List[TxnRow]:
    """All of the user's transactions dated inside the period, with category."""
    criteria = transaction_criteria(user_id, period=period)
    stmt = criteria.apply(
        select(Transaction, Category).outerjoin(
            Category, Transaction.category_id == Category.id
        )
    ).order_by(Transaction.txn_date.desc(), Transaction.id.desc())
    with store_access(session, "reading period transactions"):
        return [(t, c) for t, c in session.exec(stmt).all()]


def fetch_recent_transactions(
    session: Session, user_id: int, limit: int = 5
) -> List[TxnRow]:
    """Latest `limit` transactions of the whole ledger, newest date first."""
    stmt = (
        transaction_criteria(user_id)
        .apply(
            select(Transaction, Category).outerjoin(
                Category, Transaction.category_id == Category.id
            )
        )
        .order_by(Transaction.txn_date.desc(), Transaction.id.desc())
        .limit(limit)
    )
    with store_access(session, "reading recent transactions"):
        return [(t, c) for t, c in session.exec(stmt).all()]


# ------------------------------------------------------------------
# Pure aggregation
# ------------------------------------------------------------------


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if txn.type == TxnType.income:
            income += txn.amount
        elif txn.type == TxnType.expense:
            expense += txn.amount
    return LedgerSummary(income=income, expense=expense, balance=income - expense)


def expense_totals(transactions: Iterable[Transaction]) -> Dict[int, float]:
    """Sum of expense amounts per category id, in first-seen order."""
    totals: Dict[int, float] = {}
    for txn in transactions:
        if txn.type != TxnType.expense:
            continue
        totals[txn.category_id] = totals.get(txn.category_id, 0.0) + txn.amount
    return totals


def share(amount: float, total: float) -> float:
    """
    Percentage of `amount` in `total`.

    A zero total is replaced by 1, so an empty month yields amount * 100
    instead of raising. Callers rely on that exact value.
    """
    return amount / (total or 1) * 100


def breakdown_expenses(
    transactions: Sequence[Transaction], categories: Mapping[int, Category]
) -> List[CategoryExpense]:
    """
    Expense amount and share per category. Categories missing from the
    lookup show up as "Unknown" in black.
    """
    totals = expense_totals(transactions)
    total_expense = sum(totals.values())
    items = []
    for category_id, amount in totals.items():
        cat = categories.get(category_id)
        items.append(
            CategoryExpense(
                category_id=category_id,
                name=cat.name if cat else UNKNOWN_CATEGORY_NAME,
                color=cat.color if cat else UNKNOWN_CATEGORY_COLOR,
                amount=amount,
                percentage=share(amount, total_expense),
            )
        )
    return items


def budget_state(percentage: float) -> BudgetState:
    """ok up to 90 %, warning up to 100 %, over beyond; bounds stay in the lower bucket."""
    if percentage > OVER_THRESHOLD:
        return BudgetState.over
    if percentage > WARNING_THRESHOLD:
        return BudgetState.warning
    return BudgetState.ok


def budget_progress(budget: Budget, category: Category, spent: float) -> BudgetProgress:
    percentage = spent / budget.amount * 100
    return BudgetProgress(
        id=budget.id,
        category_id=budget.category_id,
        category_name=category.name,
        color=category.color,
        budget_amount=budget.amount,
        spent_amount=spent,
        percentage=percentage,
        remaining=budget.amount - spent,
        state=budget_state(percentage),
    )


def track_budgets(
    budgets: Iterable[BudgetRow], transactions: Sequence[Transaction]
) -> List[BudgetProgress]:
    """Join each budget to what was actually spent in its category."""
    spent = defaultdict(float, expense_totals(transactions))
    return [budget_progress(b, c, spent[b.category_id]) for b, c in budgets]


# ------------------------------------------------------------------
# Use cases
# ------------------------------------------------------------------


def build_dashboard(
    session: Session, user_id: int, period: Period, recent_limit: int = 5
) -> Dashboard:
    rows = fetch_period_transactions(session, user_id, period)
    transactions = [t for t, _ in rows]

    recent = fetch_recent_transactions(session, user_id, recent_limit)

    totals = expense_totals(transactions)
    categories = categories_by_id(session, user_id, totals.keys())

    budgets = list_budgets(
        session, budget_criteria(user_id, month=period.month, year=period.year)
    )

    dashboard = Dashboard(
        summary=summarize(transactions),
        recent_transactions=[transaction_out(t, c) for t, c in recent],
        expense_by_category=breakdown_expenses(transactions, categories),
        budgets=track_budgets(budgets, transactions),
    )
    logger.debug(
        "dashboard user=%s %02d/%d: %d txn(s), %d budget(s)",
        user_id,
        period.month,
        period.year,
        len(transactions),
        len(budgets),
    )
    return dashboard


def monthly_report(session: Session, user_id: int, period: Period) -> MonthlyReport:
    transactions = [t for t, _ in fetch_period_transactions(session, user_id, period)]
    totals = expense_totals(transactions)
    categories = categories_by_id(session, user_id, totals.keys())
    summary = summarize(transactions)
    return MonthlyReport(
        month=period.month,
        year=period.year,
        income=summary.income,
        expense=summary.expense,
        balance=summary.balance,
        categories=[
            ReportCategory(
                id=item.category_id,
                name=item.name,
                color=item.color,
                amount=item.amount,
                percentage=item.percentage,
            )
            for item in breakdown_expenses(transactions, categories)
        ],
    )


def monthly_trend(
    session: Session, user_id: int, months: int = 6, today: Optional[date] = None
) -> List[MonthlyTotals]:
    """
    Income/expense/balance for the last `months` months, oldest first.
    One ledger read spanning the whole range, bucketed by YYYYMM.
    """
    periods = month_year_range(months, today)  # newest first
    criteria = transaction_criteria(user_id, start=periods[-1].start, end=periods[0].end)
    with store_access(session, "reading trend transactions"):
        transactions = session.exec(criteria.apply(select(Transaction))).all()

    buckets: Dict[int, List[Transaction]] = defaultdict(list)
    for txn in transactions:
        buckets[ym_from_date(txn.txn_date)].append(txn)

    result = []
    for period in reversed(periods):
        summary = summarize(buckets.get(period.year * 100 + period.month, []))
        result.append(
            MonthlyTotals(
                month=period.month,
                year=period.year,
                income=summary.income,
                expense=summary.expense,
                balance=summary.balance,
            )
        )
    return result
