# fintrack/services/categories.py
"""
Category CRUD scoped to one user, plus the default set seeded at sign-up.

A category still used by transactions cannot be deleted.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Union

from sqlalchemy import func
from sqlmodel import Session, select

from fintrack.db import store_access
from fintrack.errors import NotFound, ReferentialError
from fintrack.models import Budget, Category, Transaction, TxnType
from fintrack.schemas import CategoryIn

logger = logging.getLogger("fintrack.categories")

DEFAULT_CATEGORIES = [
    {"name": "Ăn uống", "type": "expense", "color": "#FF5252", "icon": "utensils"},
    {"name": "Di chuyển", "type": "expense", "color": "#2196F3", "icon": "car"},
    {"name": "Nhà cửa", "type": "expense", "color": "#4CAF50", "icon": "home"},
    {"name": "Mua sắm", "type": "expense", "color": "#9C27B0", "icon": "shopping-bag"},
    {"name": "Giải trí", "type": "expense", "color": "#FF9800", "icon": "film"},
    {"name": "Sức khỏe", "type": "expense", "color": "#E91E63", "icon": "heart"},
    {"name": "Giáo dục", "type": "expense", "color": "#3F51B5", "icon": "book"},
    {"name": "Khác", "type": "expense", "color": "#607D8B", "icon": "ellipsis-h"},
    {"name": "Lương", "type": "income", "color": "#4CAF50", "icon": "money-bill"},
    {"name": "Thưởng", "type": "income", "color": "#FFC107", "icon": "gift"},
    {"name": "Đầu tư", "type": "income", "color": "#2196F3", "icon": "chart-line"},
    {"name": "Thu nhập khác", "type": "income", "color": "#9C27B0", "icon": "plus-circle"},
]

IN_USE_MESSAGE = (
    "Cannot delete category with transactions. "
    "Delete transactions first or move them to another category."
)


def seed_default_categories(session: Session, user_id: int) -> List[Category]:
    """Add the default categories for a new user (caller commits)."""
    rows = [
        Category(
            user_id=user_id,
            name=c["name"],
            type=TxnType(c["type"]),
            color=c["color"],
            icon=c["icon"],
        )
        for c in DEFAULT_CATEGORIES
    ]
    session.add_all(rows)
    return rows


def list_categories(
    session: Session, user_id: int, type: Union[TxnType, str, None] = None
) -> List[Category]:
    stmt = select(Category).where(Category.user_id == user_id)
    if type:
        stmt = stmt.where(Category.type == TxnType(type))
    stmt = stmt.order_by(Category.name)
    with store_access(session, "listing categories"):
        return list(session.exec(stmt).all())


def get_category(session: Session, user_id: int, category_id: int) -> Category:
    """Return the user's category or raise NotFound (also for other users' ids)."""
    with store_access(session, "loading a category"):
        cat = session.get(Category, category_id)
    if cat is None or cat.user_id != user_id:
        raise NotFound("Category not found")
    return cat


def categories_by_id(
    session: Session, user_id: int, ids: Iterable[int]
) -> dict[int, Category]:
    """One lookup for a set of ids; unknown ids are simply absent."""
    wanted = set(ids)
    if not wanted:
        return {}
    stmt = select(Category).where(Category.user_id == user_id, Category.id.in_(wanted))
    with store_access(session, "looking up categories"):
        return {c.id: c for c in session.exec(stmt).all()}


def create_category(session: Session, user_id: int, data: CategoryIn) -> Category:
    cat = Category(
        user_id=user_id,
        name=data.name.strip(),
        type=data.type,
        color=data.color,
        icon=data.icon or None,
    )
    with store_access(session, "creating a category"):
        session.add(cat)
        session.commit()
        session.refresh(cat)
    return cat


def update_category(
    session: Session, user_id: int, category_id: int, data: CategoryIn
) -> Category:
    cat = get_category(session, user_id, category_id)
    cat.name = data.name.strip()
    cat.type = data.type
    cat.color = data.color
    cat.icon = data.icon or None
    with store_access(session, "updating a category"):
        session.add(cat)
        session.commit()
        session.refresh(cat)
    return cat


def count_transactions(session: Session, category_id: int) -> int:
    stmt = select(func.count()).select_from(Transaction).where(
        Transaction.category_id == category_id
    )
    with store_access(session, "counting category transactions"):
        return session.exec(stmt).one()


def delete_category(session: Session, user_id: int, category_id: int) -> None:
    """
    Hard delete, together with the budgets set for the category.
    Refused with ReferentialError while any transaction points at it;
    nothing is changed in that case.
    """
    cat = get_category(session, user_id, category_id)
    used_by = count_transactions(session, cat.id)
    if used_by > 0:
        logger.info(
            "refusing to delete category %s of user %s: %d transaction(s)",
            cat.id,
            user_id,
            used_by,
        )
        raise ReferentialError(IN_USE_MESSAGE)
    with store_access(session, "deleting a category"):
        budgets = session.exec(select(Budget).where(Budget.category_id == cat.id)).all()
        for budget in budgets:
            session.delete(budget)
        session.delete(cat)
        session.commit()
