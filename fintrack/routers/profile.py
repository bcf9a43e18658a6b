# fintrack/routers/profile.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.responses import ok
from fintrack.schemas import ProfileIn, UserOut
from fintrack.security import current_user_id
from fintrack.services.users import get_user, rename_user

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
def read_profile(
    user_id: int = Depends(current_user_id), session: Session = Depends(get_session)
):
    return ok(UserOut.model_validate(get_user(session, user_id)))


@router.post("")
def update_profile(
    payload: ProfileIn,
    user_id: int = Depends(current_user_id),
    session: Session = Depends(get_session),
):
    """Only the display name can change after registration."""
    return ok(UserOut.model_validate(rename_user(session, user_id, payload.name)))
