# fintrack/security.py
from __future__ import annotations

from typing import Optional

from fastapi.requests import Request
from passlib.context import CryptContext

from fintrack.errors import Unauthorized

# Password hashing context (bcrypt by default)
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ------------ Password helpers ------------


def hash_password(plain: str) -> str:
    """Return a secure hash for a plaintext password."""
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash."""
    return _pwd.verify(plain, hashed)


# ------------ Session / Auth helpers ------------


def get_user_id_from_session(request: Request) -> Optional[int]:
    """
    Read user_id from the session (if present). Returns int or None.
    """
    if "session" not in request.scope:  # SessionMiddleware not installed
        return None
    uid = request.session.get("user_id")  # set during /api/auth/login
    return int(uid) if uid is not None else None


def current_user_id(request: Request) -> int:
    """
    FastAPI dependency: the signed-in user's id, or Unauthorized (401).
    Usage:  user_id: int = Depends(current_user_id)
    """
    uid = get_user_id_from_session(request)
    if uid is None:
        raise Unauthorized()
    return uid


def sign_in(request: Request, user_id: int) -> None:
    request.session["user_id"] = user_id


def sign_out(request: Request) -> None:
    request.session.clear()


__all__ = [
    "hash_password",
    "verify_password",
    "get_user_id_from_session",
    "current_user_id",
    "sign_in",
    "sign_out",
]
