"""Shared test fixtures for expensebook tests."""

from datetime import date, datetime, timedelta

import pytest
from flask_login import FlaskLoginClient

from expensebook import create_app
from expensebook.config import TestingConfig
from expensebook.extensions import db
from expensebook.models import Expense, User
from expensebook.store import ExpenseStore



# ── Fixtures ──


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    app.test_client_class = FlaskLoginClient
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def user(app):
    u = User(email="alice@example.com")
    u.set_password("secret123")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def other_user(app):
    u = User(email="bob@example.com")
    u.set_password("secret123")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def anon_client(app):
    return app.test_client()


@pytest.fixture
def client(app, user):
    """A test client already logged in as ``user``."""
    return app.test_client(user=user)


@pytest.fixture
def store(app, user):
    return ExpenseStore.for_user(db, user)


@pytest.fixture
def add_expense(app, user):
    """Insert an expense directly, bypassing the form."""
    counter = {"n": 0}

    def _add(amount, day=None, method=None, item="Item", period="morning", owner=None, created_at=None):
        counter["n"] += 1
        exp = Expense(
            user_id=(owner or user).id,
            date=day or date.today(),
            time_period=period,
            item_name=item,
            amount=amount,
            payment_method=method or app.config["PAYMENT_METHODS"][0],
            created_at=created_at or datetime(2020, 1, 1) + timedelta(seconds=counter["n"]),
        )
        db.session.add(exp)
        db.session.commit()
        return exp

    return _add
