# fintrack/services/users.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from fintrack.db import store_access
from fintrack.errors import NotFound, ValidationError
from fintrack.models import User
from fintrack.security import hash_password, verify_password
from fintrack.services.categories import seed_default_categories

logger = logging.getLogger("fintrack.users")

DUPLICATE_EMAIL_MESSAGE = "email: an account with this email already exists"


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    email = email.strip().lower()
    with store_access(session, "looking up a user"):
        return session.exec(select(User).where(User.email == email)).first()


def register_user(session: Session, *, name: str, email: str, password: str) -> User:
    """Create the account and its default categories in one commit."""
    email = email.strip().lower()
    if find_user_by_email(session, email) is not None:
        raise ValidationError(DUPLICATE_EMAIL_MESSAGE)

    user = User(name=name.strip(), email=email, hashed_password=hash_password(password))
    with store_access(session, "registering a user"):
        try:
            session.add(user)
            session.flush()  # assigns user.id for the seeded categories
            seed_default_categories(session, user.id)
            session.commit()
        except IntegrityError:
            # lost a race with another sign-up for the same email
            session.rollback()
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE)
        session.refresh(user)
    logger.info("registered user %s", user.id)
    return user


def authenticate(session: Session, email: str, password: str) -> Optional[User]:
    user = find_user_by_email(session, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def get_user(session: Session, user_id: int) -> User:
    with store_access(session, "loading a user"):
        user = session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def rename_user(session: Session, user_id: int, name: str) -> User:
    user = get_user(session, user_id)
    user.name = name.strip()
    with store_access(session, "renaming a user"):
        session.add(user)
        session.commit()
        session.refresh(user)
    return user
