# fintrack/schemas.py
"""
Request/response shapes for the JSON API.

Wire names are camelCase (categoryId, budgetAmount, ...); Python code uses
snake_case. Every model accepts both on input and dumps camelCase with
`model_dump(by_alias=True)`.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from fintrack.models import TxnType

# Amounts are whole VND in practice; the bounds keep every derived
# percentage a finite, JSON-encodable float.
MIN_AMOUNT = 0.01
MAX_AMOUNT = 1e15


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------- Auth / profile ----------


class RegisterIn(ApiModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6)


class ProfileIn(ApiModel):
    name: str = Field(min_length=2)


class UserOut(ApiModel):
    id: int
    name: str
    email: str


# ---------- Categories ----------


class CategoryIn(ApiModel):
    name: str = Field(min_length=2)
    type: TxnType
    color: str = Field(min_length=1)
    icon: Optional[str] = None


class CategoryOut(ApiModel):
    id: int
    name: str
    type: TxnType
    color: str
    icon: Optional[str] = None


# ---------- Transactions ----------


class TransactionIn(ApiModel):
    amount: float = Field(ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    type: TxnType
    category_id: int
    description: Optional[str] = None
    txn_date: date = Field(alias="date")


class TransactionOut(ApiModel):
    id: int
    amount: float
    type: TxnType
    category_id: int
    description: Optional[str] = None
    txn_date: date = Field(alias="date")
    category: Optional[CategoryOut] = None


class Pagination(ApiModel):
    total: int
    page: int
    limit: int
    total_pages: int


class TransactionPage(ApiModel):
    transactions: List[TransactionOut]
    pagination: Pagination


# ---------- Budgets ----------


class BudgetIn(ApiModel):
    category_id: int
    amount: float = Field(ge=MIN_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2020, le=2050)


class BudgetOut(ApiModel):
    id: int
    category_id: int
    amount: float
    month: int
    year: int
    category: Optional[CategoryOut] = None


# ---------- Dashboard / reports ----------


class LedgerSummary(ApiModel):
    income: float = 0
    expense: float = 0
    balance: float = 0


class CategoryExpense(ApiModel):
    category_id: int
    name: str
    color: str
    amount: float
    percentage: float


class BudgetState(str, Enum):
    ok = "ok"
    warning = "warning"
    over = "over"


class BudgetProgress(ApiModel):
    id: int
    category_id: int
    category_name: str
    color: str
    budget_amount: float
    spent_amount: float
    percentage: float
    remaining: float
    state: BudgetState


class Dashboard(ApiModel):
    summary: LedgerSummary
    recent_transactions: List[TransactionOut]
    expense_by_category: List[CategoryExpense]
    budgets: List[BudgetProgress]


class ReportCategory(ApiModel):
    id: int
    name: str
    color: str
    amount: float
    percentage: float


class MonthlyReport(ApiModel):
    month: int
    year: int
    income: float
    expense: float
    balance: float
    categories: List[ReportCategory]


class MonthlyTotals(ApiModel):
    month: int
    year: int
    income: float
    expense: float
    balance: float
