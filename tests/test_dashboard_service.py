# tests/test_dashboard_service.py
"""
Unit tests for the aggregation engine (no HTTP).
Rows are created straight through SQLModel on a per-test SQLite file.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import Session, SQLModel, create_engine

from fintrack.errors import DataAccessError
from fintrack.models import Budget, Category, Transaction, TxnType, User
from fintrack.periods import Period
from fintrack.schemas import BudgetState
from fintrack.services.dashboard import (
    breakdown_expenses,
    budget_state,
    build_dashboard,
    fetch_period_transactions,
    monthly_report,
    monthly_trend,
    share,
    summarize,
    track_budgets,
)

MARCH = Period(month=3, year=2025)


def _txn(type, amount, category_id, d=date(2025, 3, 10), user_id=1):
    return Transaction(
        user_id=user_id,
        category_id=category_id,
        type=TxnType(type),
        amount=amount,
        txn_date=d,
    )


@pytest.fixture()
def ledger(db_session: Session):
    """One user with three categories: A, B (expense) and C (income)."""
    user = User(name="Svc", email="svc@test.com", hashed_password="x")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    cats = {}
    for key, name, type, color in [
        ("A", "Food", "expense", "#FF5252"),
        ("B", "Rent", "expense", "#2196F3"),
        ("C", "Salary", "income", "#4CAF50"),
    ]:
        cat = Category(user_id=user.id, name=name, type=TxnType(type), color=color)
        db_session.add(cat)
        cats[key] = cat
    db_session.commit()
    for cat in cats.values():
        db_session.refresh(cat)
    return user, cats


def _add(session, *rows):
    for row in rows:
        session.add(row)
    session.commit()


# ---------- pure aggregation ----------


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [_txn("income", 2_000_000, 3)],
        [_txn("expense", 150_000, 1), _txn("expense", 50_000.5, 2)],
        [_txn("income", 10, 3), _txn("expense", 30, 1), _txn("expense", 0.25, 1)],
    ],
)
def test_balance_is_income_minus_expense(rows):
    s = summarize(rows)
    assert s.balance == s.income - s.expense


def test_empty_ledger_summary_is_zero():
    s = summarize([])
    assert (s.income, s.expense, s.balance) == (0, 0, 0)


def test_breakdown_percentages_sum_to_100():
    rows = [
        _txn("expense", 123_000, 1),
        _txn("expense", 77_000, 2),
        _txn("expense", 33_333, 1),
        _txn("income", 999_999, 3),
    ]
    cats = {
        1: Category(id=1, user_id=1, name="Food", type=TxnType.expense, color="#f00"),
        2: Category(id=2, user_id=1, name="Rent", type=TxnType.expense, color="#00f"),
    }
    items = breakdown_expenses(rows, cats)
    assert [i.category_id for i in items] == [1, 2]
    assert sum(i.percentage for i in items) == pytest.approx(100.0)


def test_breakdown_unknown_category_fallback():
    items = breakdown_expenses([_txn("expense", 10, 42)], {})
    assert items[0].name == "Unknown"
    assert items[0].color == "#000000"


def test_breakdown_zero_total_uses_denominator_one():
    """
    Known quirk: with a zero expense total the denominator becomes 1,
    so the share is amount * 100. Kept as-is on purpose.
    """
    assert share(5, 0) == 500
    assert share(0, 0) == 0

    rows = [_txn("expense", 0.0, 1), _txn("expense", 0.0, 2)]
    assert [i.percentage for i in breakdown_expenses(rows, {})] == [0.0, 0.0]

    # offsetting rows bring the total to zero while each group is not
    rows = [_txn("expense", 5.0, 1), _txn("expense", -5.0, 2)]
    items = breakdown_expenses(rows, {})
    assert [i.percentage for i in items] == [500.0, -500.0]
    assert all(i.percentage == i.amount * 100 for i in items)


@pytest.mark.parametrize(
    "pct, state",
    [
        (0, BudgetState.ok),
        (90, BudgetState.ok),
        (90.0001, BudgetState.warning),
        (95, BudgetState.warning),
        (100, BudgetState.warning),
        (100.0001, BudgetState.over),
        (120, BudgetState.over),
    ],
)
def test_budget_state_boundaries(pct, state):
    assert budget_state(pct) == state


def test_track_budgets_remaining_and_overage_agree():
    cat = Category(id=1, user_id=1, name="Food", type=TxnType.expense, color="#f00")
    budgets = [
        (Budget(id=1, user_id=1, category_id=1, amount=500_000, month=3, year=2025), cat),
    ]
    for spent in (0, 250_000, 500_000, 600_000):
        [p] = track_budgets(budgets, [_txn("expense", spent, 1)])
        assert p.remaining == p.budget_amount - p.spent_amount
        assert (p.remaining < 0) == (p.percentage > 100)


def test_track_budgets_ignores_income_and_other_categories():
    cat = Category(id=1, user_id=1, name="Food", type=TxnType.expense, color="#f00")
    budget = Budget(id=7, user_id=1, category_id=1, amount=100, month=3, year=2025)
    rows = [_txn("expense", 40, 1), _txn("expense", 500, 2), _txn("income", 1000, 1)]
    [p] = track_budgets([(budget, cat)], rows)
    assert p.spent_amount == 40
    assert p.category_name == "Food"
    assert p.state == BudgetState.ok


# ---------- with the store ----------


def test_scenario_a_summary_and_breakdown(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        _txn("expense", 400_000, cats["A"].id, user_id=user.id),
        _txn("expense", 600_000, cats["B"].id, date(2025, 3, 20), user_id=user.id),
        _txn("income", 2_000_000, cats["C"].id, date(2025, 3, 1), user_id=user.id),
    )

    dash = build_dashboard(db_session, user.id, MARCH)

    assert dash.summary.income == 2_000_000
    assert dash.summary.expense == 1_000_000
    assert dash.summary.balance == 1_000_000
    shares = {i.category_id: i.percentage for i in dash.expense_by_category}
    assert shares[cats["A"].id] == pytest.approx(40)
    assert shares[cats["B"].id] == pytest.approx(60)
    names = {i.name for i in dash.expense_by_category}
    assert names == {"Food", "Rent"}


def test_scenario_b_empty_month(db_session, ledger):
    user, cats = ledger
    # activity outside March only
    _add(db_session, _txn("expense", 10_000, cats["A"].id, date(2025, 2, 28), user_id=user.id))

    dash = build_dashboard(db_session, user.id, MARCH)

    assert (dash.summary.income, dash.summary.expense, dash.summary.balance) == (0, 0, 0)
    assert dash.expense_by_category == []
    # recent activity is ledger-wide, not month-scoped
    assert len(dash.recent_transactions) == 1


def test_scenario_c_over_budget(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        Budget(user_id=user.id, category_id=cats["A"].id, amount=500_000, month=3, year=2025),
        _txn("expense", 600_000, cats["A"].id, user_id=user.id),
    )

    [p] = build_dashboard(db_session, user.id, MARCH).budgets

    assert p.percentage == pytest.approx(120)
    assert p.remaining == -100_000
    assert p.state == BudgetState.over
    assert p.category_name == "Food"
    assert p.color == "#FF5252"


def test_scenario_d_near_limit(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        Budget(user_id=user.id, category_id=cats["B"].id, amount=1_000_000, month=3, year=2025),
        _txn("expense", 950_000, cats["B"].id, user_id=user.id),
    )

    [p] = build_dashboard(db_session, user.id, MARCH).budgets

    assert p.percentage == pytest.approx(95)
    assert p.state == BudgetState.warning


def test_period_bounds_are_inclusive(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        _txn("expense", 1, cats["A"].id, date(2025, 3, 1), user_id=user.id),
        _txn("expense", 2, cats["A"].id, date(2025, 3, 31), user_id=user.id),
        _txn("expense", 4, cats["A"].id, date(2025, 4, 1), user_id=user.id),
        _txn("expense", 8, cats["A"].id, date(2025, 2, 28), user_id=user.id),
    )
    rows = fetch_period_transactions(db_session, user.id, MARCH)
    assert sorted(t.amount for t, _ in rows) == [1, 2]


def test_recent_transactions_limit_and_order(db_session, ledger):
    user, cats = ledger
    for day in range(1, 9):
        _add(db_session, _txn("expense", day, cats["A"].id, date(2025, 1, day), user_id=user.id))

    dash = build_dashboard(db_session, user.id, MARCH, recent_limit=5)

    dates = [t.txn_date for t in dash.recent_transactions]
    assert dates == [date(2025, 1, d) for d in (8, 7, 6, 5, 4)]
    assert dash.recent_transactions[0].category.name == "Food"


def test_other_users_rows_are_invisible(db_session, ledger):
    user, cats = ledger
    other = User(name="Other", email="o@test.com", hashed_password="x")
    db_session.add(other)
    db_session.commit()
    db_session.refresh(other)
    _add(db_session, _txn("income", 5_000, cats["C"].id, user_id=other.id))

    dash = build_dashboard(db_session, user.id, MARCH)
    assert dash.summary.income == 0
    assert dash.recent_transactions == []


def test_monthly_report_matches_dashboard(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        _txn("expense", 300, cats["A"].id, user_id=user.id),
        _txn("expense", 100, cats["B"].id, user_id=user.id),
        _txn("income", 1_000, cats["C"].id, user_id=user.id),
    )
    report = monthly_report(db_session, user.id, MARCH)
    assert (report.month, report.year) == (3, 2025)
    assert report.balance == 600
    by_name = {c.name: c.percentage for c in report.categories}
    assert by_name == {"Food": pytest.approx(75), "Rent": pytest.approx(25)}


def test_monthly_trend_oldest_first_across_year_end(db_session, ledger):
    user, cats = ledger
    _add(
        db_session,
        _txn("income", 1_000, cats["C"].id, date(2024, 12, 5), user_id=user.id),
        _txn("expense", 400, cats["A"].id, date(2025, 1, 9), user_id=user.id),
        _txn("expense", 50, cats["A"].id, date(2024, 10, 31), user_id=user.id),  # outside
    )
    trend = monthly_trend(db_session, user.id, months=3, today=date(2025, 2, 14))

    assert [(t.month, t.year) for t in trend] == [(12, 2024), (1, 2025), (2, 2025)]
    assert [t.balance for t in trend] == [1_000, -400, 0]


def test_store_failure_raises_data_access_error():
    # no tables created: every query fails inside the store
    engine = create_engine("sqlite:///:memory:")
    with Session(engine) as s:
        with pytest.raises(DataAccessError) as info:
            build_dashboard(s, 1, MARCH)
    assert info.value.status_code == 500
    assert info.value.message == "Internal server error"


def test_metadata_creates_all_tables():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    assert {"user", "category", "transaction", "budget"} <= set(SQLModel.metadata.tables)
