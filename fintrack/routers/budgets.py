# fintrack/routers/budgets.py
# Purpose: monthly budgets per category for the signed-in user.
# - POST is "set budget": same category + month + year updates the amount.

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.responses import ok
from fintrack.schemas import BudgetIn
from fintrack.security import current_user_id
from fintrack.services import budgets as svc
from fintrack.services.criteria import budget_criteria

router = APIRouter(prefix="/api/budgets", tags=["budgets"])


@router.get("")
def list_budgets(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2020, le=2050),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    criteria = budget_criteria(user_id, month=month, year=year, category_id=category_id)
    rows = svc.list_budgets(session, criteria)
    return ok([svc.budget_out(b, c) for b, c in rows])


@router.post("")
def set_budget(
    payload: BudgetIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    (budget, cat), _created = svc.set_budget(session, user_id, payload)
    return ok(svc.budget_out(budget, cat))


@router.get("/{budget_id}")
def read_budget(
    budget_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    budget, cat = svc.get_budget(session, user_id, budget_id)
    return ok(svc.budget_out(budget, cat))


@router.patch("/{budget_id}")
def update_budget(
    budget_id: int,
    payload: BudgetIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    budget, cat = svc.update_budget(session, user_id, budget_id, payload)
    return ok(svc.budget_out(budget, cat))


@router.delete("/{budget_id}")
def delete_budget(
    budget_id: int,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    svc.delete_budget(session, user_id, budget_id)
    return ok()
