# fintrack/services/criteria.py
"""
Explicit filter values for ledger and budget queries.

Routers and services build these with the constructor functions below
instead of growing a filter dict field by field; `apply()` turns one into
WHERE clauses on a select() over the matching table.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from fintrack.models import Budget, Transaction, TxnType
from fintrack.periods import Period


@dataclass(frozen=True)
class TransactionCriteria:
    user_id: int
    type: Optional[TxnType] = None
    category_id: Optional[int] = None
    start: Optional[date] = None  # inclusive
    end: Optional[date] = None  # inclusive

    def apply(self, stmt):
        stmt = stmt.where(Transaction.user_id == self.user_id)
        if self.type is not None:
            stmt = stmt.where(Transaction.type == self.type)
        if self.category_id is not None:
            stmt = stmt.where(Transaction.category_id == self.category_id)
        if self.start is not None:
            stmt = stmt.where(Transaction.txn_date >= self.start)
        if self.end is not None:
            stmt = stmt.where(Transaction.txn_date <= self.end)
        return stmt


@dataclass(frozen=True)
class BudgetCriteria:
    user_id: int
    month: Optional[int] = None
    year: Optional[int] = None
    category_id: Optional[int] = None

    def apply(self, stmt):
        stmt = stmt.where(Budget.user_id == self.user_id)
        if self.month is not None:
            stmt = stmt.where(Budget.month == self.month)
        if self.year is not None:
            stmt = stmt.where(Budget.year == self.year)
        if self.category_id is not None:
            stmt = stmt.where(Budget.category_id == self.category_id)
        return stmt


def transaction_criteria(
    user_id: int,
    *,
    type: Union[TxnType, str, None] = None,
    category_id: Optional[int] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    period: Optional[Period] = None,
) -> TransactionCriteria:
    """
    Build ledger criteria. A `period` sets both date bounds and wins over
    explicit start/end. Strings are accepted for `type` ("income"/"expense").
    """
    if isinstance(type, str):
        type = TxnType(type)
    if period is not None:
        start, end = period.start, period.end
    return TransactionCriteria(
        user_id=user_id, type=type, category_id=category_id, start=start, end=end
    )


def budget_criteria(
    user_id: int,
    *,
    month: Optional[int] = None,
    year: Optional[int] = None,
    category_id: Optional[int] = None,
) -> BudgetCriteria:
    return BudgetCriteria(
        user_id=user_id, month=month, year=year, category_id=category_id
    )
