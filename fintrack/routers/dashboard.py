# fintrack/routers/dashboard.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from sqlmodel import Session

from fintrack.config import get_settings
from fintrack.db import get_session
from fintrack.periods import Period
from fintrack.responses import ok
from fintrack.security import current_user_id
from fintrack.services.dashboard import build_dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_today() -> date:
    """Local calendar date; tests override this dependency."""
    return date.today()


@router.get("")
def dashboard(
    today: date = Depends(get_today),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    """Current month's summary, recent activity, category split and budgets."""
    data = build_dashboard(
        session,
        user_id,
        Period.containing(today),
        recent_limit=get_settings().recent_transactions_limit,
    )
    return ok(data)
