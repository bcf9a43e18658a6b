# fintrack/services/budgets.py
"""
Monthly budgets per category.

"Set budget" is an upsert keyed by (user, category, month, year):
submitting the same key again replaces the amount instead of adding a row.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlmodel import Session, select

from fintrack.db import store_access
from fintrack.errors import NotFound, ValidationError
from fintrack.models import Budget, Category
from fintrack.schemas import BudgetIn, BudgetOut, CategoryOut
from fintrack.services.categories import get_category
from fintrack.services.criteria import BudgetCriteria, budget_criteria

logger = logging.getLogger("fintrack.budgets")

BudgetRow = Tuple[Budget, Category]


def budget_out(budget: Budget, category: Optional[Category]) -> BudgetOut:
    out = BudgetOut.model_validate(budget)
    if category is not None:
        out.category = CategoryOut.model_validate(category)
    return out


def list_budgets(session: Session, criteria: BudgetCriteria) -> List[BudgetRow]:
    """Budgets matching the criteria, each joined to its category."""
    stmt = criteria.apply(
        select(Budget, Category).join(Category, Budget.category_id == Category.id)
    )
    stmt = stmt.order_by(Budget.year.desc(), Budget.month.desc(), Category.name)
    with store_access(session, "listing budgets"):
        return [(b, c) for b, c in session.exec(stmt).all()]


def find_budget_for_period(
    session: Session, user_id: int, category_id: int, month: int, year: int
) -> Optional[Budget]:
    criteria = budget_criteria(user_id, month=month, year=year, category_id=category_id)
    with store_access(session, "looking up a budget"):
        return session.exec(criteria.apply(select(Budget))).first()


def set_budget(session: Session, user_id: int, data: BudgetIn) -> Tuple[BudgetRow, bool]:
    """
    Create the budget, or update the amount of the one already set for the
    same category and month. Returns ((budget, category), created).
    """
    cat = get_category(session, user_id, data.category_id)
    existing = find_budget_for_period(
        session, user_id, cat.id, data.month, data.year
    )
    if existing is not None:
        existing.amount = float(data.amount)
        budget, created = existing, False
    else:
        budget = Budget(
            user_id=user_id,
            category_id=cat.id,
            amount=float(data.amount),
            month=data.month,
            year=data.year,
        )
        created = True

    with store_access(session, "saving a budget"):
        session.add(budget)
        session.commit()
        session.refresh(budget)
    logger.info(
        "budget %s %s for user %s category %s %02d/%d",
        budget.id,
        "created" if created else "updated",
        user_id,
        cat.id,
        budget.month,
        budget.year,
    )
    return (budget, cat), created


def get_budget(session: Session, user_id: int, budget_id: int) -> BudgetRow:
    stmt = (
        select(Budget, Category)
        .join(Category, Budget.category_id == Category.id)
        .where(Budget.id == budget_id, Budget.user_id == user_id)
    )
    with store_access(session, "loading a budget"):
        row = session.exec(stmt).first()
    if row is None:
        raise NotFound("Budget not found")
    return row[0], row[1]


def update_budget(
    session: Session, user_id: int, budget_id: int, data: BudgetIn
) -> BudgetRow:
    """
    Full replace. The new category must be the user's, and the new
    (category, month, year) must not belong to a different budget.
    """
    budget, _ = get_budget(session, user_id, budget_id)
    cat = get_category(session, user_id, data.category_id)

    clash = find_budget_for_period(session, user_id, cat.id, data.month, data.year)
    if clash is not None and clash.id != budget.id:
        raise ValidationError(
            "categoryId: a budget for this category and month already exists"
        )

    budget.category_id = cat.id
    budget.amount = float(data.amount)
    budget.month = data.month
    budget.year = data.year
    with store_access(session, "updating a budget"):
        session.add(budget)
        session.commit()
        session.refresh(budget)
    return budget, cat


def delete_budget(session: Session, user_id: int, budget_id: int) -> None:
    budget, _ = get_budget(session, user_id, budget_id)
    with store_access(session, "deleting a budget"):
        session.delete(budget)
        session.commit()
