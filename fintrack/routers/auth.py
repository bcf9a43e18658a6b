# fintrack/routers/auth.py
# Session-cookie auth: register / login / logout.

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.errors import ValidationError
from fintrack.responses import ok
from fintrack.schemas import LoginIn, RegisterIn, UserOut
from fintrack.security import sign_in, sign_out
from fintrack.services.users import authenticate, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register")
def register(
    payload: RegisterIn, request: Request, session: Session = Depends(get_session)
):
    user = register_user(
        session, name=payload.name, email=payload.email, password=payload.password
    )
    sign_in(request, user.id)
    return ok(UserOut.model_validate(user))


@router.post("/login")
def login(payload: LoginIn, request: Request, session: Session = Depends(get_session)):
    user = authenticate(session, payload.email, payload.password)
    if user is None:
        raise ValidationError("Invalid email or password.")
    sign_in(request, user.id)
    return ok(UserOut.model_validate(user))


@router.post("/logout")
def logout(request: Request):
    sign_out(request)
    return ok()
