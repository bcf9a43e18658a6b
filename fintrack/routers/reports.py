# fintrack/routers/reports.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.periods import Period
from fintrack.responses import ok
from fintrack.routers.dashboard import get_today
from fintrack.security import current_user_id
from fintrack.services.dashboard import monthly_report, monthly_trend

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/monthly")
def report_for_month(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2020, le=2050),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    return ok(monthly_report(session, user_id, Period(month=month, year=year)))


@router.get("/trend")
def trend(
    months: int = Query(6, ge=1, le=24),
    today: date = Depends(get_today),
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    """Monthly totals for the last `months` months, oldest first."""
    return ok(monthly_trend(session, user_id, months, today))
