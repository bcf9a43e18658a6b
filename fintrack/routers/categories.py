# fintrack/routers/categories.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.models import TxnType
from fintrack.responses import ok
from fintrack.schemas import CategoryIn, CategoryOut
from fintrack.security import current_user_id
from fintrack.services import categories as svc

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def list_categories(
    type: Optional[TxnType] = Query(None),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    cats = svc.list_categories(session, user_id, type)
    return ok([CategoryOut.model_validate(c) for c in cats])


@router.post("")
def create_category(
    payload: CategoryIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    return ok(CategoryOut.model_validate(svc.create_category(session, user_id, payload)))


@router.get("/{category_id}")
def read_category(
    category_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    return ok(CategoryOut.model_validate(svc.get_category(session, user_id, category_id)))


@router.patch("/{category_id}")
def update_category(
    category_id: int,
    payload: CategoryIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    cat = svc.update_category(session, user_id, category_id, payload)
    return ok(CategoryOut.model_validate(cat))


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    """Refused (400) while transactions still use the category."""
    svc.delete_category(session, user_id, category_id)
    return ok()
