# fintrack/models.py
from datetime import date, datetime, timezone  # created_at stamps / calendar dates
from enum import Enum  # small enums for clarity
from typing import Optional  # nullable fields

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel, UniqueConstraint


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):  # "table=True" = a real DB table
    id: int | None = Field(default=None, primary_key=True)  # DB assigns it
    name: str  # display name, the only field users may change later
    email: str = Field(index=True)
    hashed_password: str  # never plaintext
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)


class TxnType(str, Enum):
    income = "income"  # stored as TEXT
    expense = "expense"


class Category(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="user.id")  # owner
    name: str
    type: TxnType = Field(index=True)
    color: str  # e.g. "#FF5252"
    icon: Optional[str] = None


class Transaction(SQLModel, table=True):
    """
    A single real-life entry of money moving in or out.
    Amounts are positive; the direction lives in `type`.
    """

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="user.id")
    category_id: int = Field(index=True, foreign_key="category.id")

    type: TxnType = Field(index=True)
    amount: float  # whole currency units for VND

    # Calendar date only; time of day is irrelevant for reporting
    txn_date: date = Field(index=True)

    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class Budget(SQLModel, table=True):
    """Spending target for one category in one calendar month."""

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="user.id")
    category_id: int = Field(index=True, foreign_key="category.id")
    amount: float
    month: int  # 1..12
    year: int  # 2020..2050

    # lookup index only; one-per-period is kept by the upsert in services.budgets
    __table_args__ = (Index("ix_budget_user_period", "user_id", "year", "month"),)
