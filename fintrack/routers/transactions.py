# fintrack/routers/transactions.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.models import TxnType
from fintrack.responses import ok
from fintrack.schemas import Pagination, TransactionIn, TransactionPage
from fintrack.security import current_user_id
from fintrack.services import transactions as svc
from fintrack.services.criteria import transaction_criteria

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("")
def list_transactions(
    type: Optional[TxnType] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    criteria = transaction_criteria(
        user_id, type=type, category_id=category_id, start=start_date, end=end_date
    )
    rows, total = svc.list_transactions(session, criteria, page=page, limit=limit)
    return ok(
        TransactionPage(
            transactions=[svc.transaction_out(t, c) for t, c in rows],
            pagination=Pagination(
                total=total,
                page=page,
                limit=limit,
                total_pages=svc.total_pages(total, limit),
            ),
        )
    )


@router.post("")
def create_transaction(
    payload: TransactionIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    txn, cat = svc.create_from_input(session, user_id, payload)
    return ok(svc.transaction_out(txn, cat))


@router.get("/{txn_id}")
def read_transaction(
    txn_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    txn, cat = svc.get_transaction(session, user_id, txn_id)
    return ok(svc.transaction_out(txn, cat))


@router.patch("/{txn_id}")
def update_transaction(
    txn_id: int,
    payload: TransactionIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    txn, cat = svc.update_transaction(session, user_id, txn_id, payload)
    return ok(svc.transaction_out(txn, cat))


@router.delete("/{txn_id}")
def delete_transaction(
    txn_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    svc.delete_transaction(session, user_id, txn_id)
    return ok()
