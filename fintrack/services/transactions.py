# fintrack/services/transactions.py
"""
Transaction CRUD for one user.

Why a service module:
- Keep router code thin.
- Centralize the write-time checks: the category must be the user's own,
  and its type must match the transaction's type.
"""

from __future__ import annotations

import math
from datetime import date
from typing import List, Optional, Tuple, Union

from sqlalchemy import func
from sqlmodel import Session, select

from fintrack.db import store_access
from fintrack.errors import NotFound, ValidationError
from fintrack.models import Category, Transaction, TxnType
from fintrack.schemas import CategoryOut, TransactionIn, TransactionOut
from fintrack.services.categories import get_category
from fintrack.services.criteria import TransactionCriteria

TxnRow = Tuple[Transaction, Optional[Category]]


def transaction_out(txn: Transaction, category: Optional[Category]) -> TransactionOut:
    """Wire shape of a transaction, with its category attached when known."""
    out = TransactionOut.model_validate(txn)
    if category is not None:
        out.category = CategoryOut.model_validate(category)
    return out


def _checked_category(
    session: Session, user_id: int, category_id: int, type: TxnType
) -> Category:
    cat = get_category(session, user_id, category_id)
    if cat.type != type:
        raise ValidationError(
            f"type: a {type.value} transaction cannot use {cat.type.value} category"
        )
    return cat


def create_transaction(
    session: Session,
    user_id: int,
    *,
    type: Union[TxnType, str],
    category_id: int,
    amount: float,
    txn_date: date,
    description: Optional[str] = None,
) -> TxnRow:
    """
    Create a Transaction row and commit it.

    Plain words:
    - We accept either a TxnType enum ('income'/'expense') OR a string.
    - The category must exist, belong to the user and have the same type.
    - We commit & refresh so the caller gets a persisted object with an id.
    """
    if isinstance(type, str):
        type = TxnType(type)
    if amount <= 0:
        raise ValidationError("amount: must be greater than 0")

    cat = _checked_category(session, user_id, category_id, type)
    txn = Transaction(
        user_id=user_id,
        category_id=cat.id,
        type=type,
        amount=float(amount),
        txn_date=txn_date,
        description=description or None,
    )
    with store_access(session, "creating a transaction"):
        session.add(txn)
        session.commit()
        session.refresh(txn)
    return txn, cat


def create_from_input(session: Session, user_id: int, data: TransactionIn) -> TxnRow:
    return create_transaction(
        session,
        user_id,
        type=data.type,
        category_id=data.category_id,
        amount=data.amount,
        txn_date=data.txn_date,
        description=data.description,
    )


def get_transaction(session: Session, user_id: int, txn_id: int) -> TxnRow:
    stmt = (
        select(Transaction, Category)
        .outerjoin(Category, Transaction.category_id == Category.id)
        .where(Transaction.id == txn_id, Transaction.user_id == user_id)
    )
    with store_access(session, "loading a transaction"):
        row = session.exec(stmt).first()
    if row is None:
        raise NotFound("Transaction not found")
    return row[0], row[1]


def update_transaction(
    session: Session, user_id: int, txn_id: int, data: TransactionIn
) -> TxnRow:
    """Full replace of the editable fields (PATCH carries the whole document)."""
    txn, _ = get_transaction(session, user_id, txn_id)
    cat = _checked_category(session, user_id, data.category_id, data.type)

    txn.type = data.type
    txn.category_id = cat.id
    txn.amount = float(data.amount)
    txn.txn_date = data.txn_date
    txn.description = data.description or None
    with store_access(session, "updating a transaction"):
        session.add(txn)
        session.commit()
        session.refresh(txn)
    return txn, cat


def delete_transaction(session: Session, user_id: int, txn_id: int) -> None:
    txn, _ = get_transaction(session, user_id, txn_id)
    with store_access(session, "deleting a transaction"):
        session.delete(txn)
        session.commit()


def list_transactions(
    session: Session,
    criteria: TransactionCriteria,
    *,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[TxnRow], int]:
    """
    One page of the ledger, newest first, plus the total match count.
    """
    count_stmt = criteria.apply(select(func.count()).select_from(Transaction))
    stmt = criteria.apply(
        select(Transaction, Category).outerjoin(
            Category, Transaction.category_id == Category.id
        )
    )
    stmt = (
        stmt.order_by(Transaction.txn_date.desc(), Transaction.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    with store_access(session, "listing transactions"):
        total = session.exec(count_stmt).one()
        rows = [(t, c) for t, c in session.exec(stmt).all()]
    return rows, total


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
