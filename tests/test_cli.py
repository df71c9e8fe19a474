"""Tests for the ``seed-demo`` command."""

from expensebook.models import Expense, User


def test_seed_demo_creates_account_and_expenses(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-demo", "Demo@Example.com", "--password", "hunter22"])
    assert result.exit_code == 0, result.output
    assert "Added 5 demo expenses for demo@example.com" in result.output
    user = User.query.filter_by(email="demo@example.com").one()
    assert user.check_password("hunter22")
    assert Expense.query.filter_by(user_id=user.id).count() == 5


def test_seed_demo_is_idempotent(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed-demo", "demo@example.com"])
    result = runner.invoke(args=["seed-demo", "demo@example.com"])
    assert "already has expenses" in result.output
    assert Expense.query.count() == 5
