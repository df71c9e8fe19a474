"""Tests for the home page and the expense entry form."""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from expensebook.events import expense_added, get_feed
from expensebook.forms import ExpenseValidationError, parse_amount
from expensebook.models import Expense
from expensebook.store import ExpenseStore


def _form(app, **overrides):
    data = {
        "date": date.today().isoformat(),
        "time_period": "midday",
        "item_name": "Lunch",
        "amount": "12.50",
        "payment_method": app.config["PAYMENT_METHODS"][1],
    }
    data.update(overrides)
    return data


class TestHomePage:
    def test_empty_home_shows_placeholders(self, client):
        resp = client.get("/dashboard/")
        assert resp.status_code == 200
        assert "¥0.00".encode() in resp.data
        assert b"No expenses in the last few days" in resp.data

    def test_home_shows_today_total(self, client, add_expense):
        add_expense(12.50)
        add_expense(7.30)
        resp = client.get("/dashboard/")
        assert "¥19.80".encode() in resp.data

    def test_form_defaults(self, app, client):
        html = client.get("/dashboard/").get_data(as_text=True)
        assert f'value="{date.today().isoformat()}"' in html
        assert '<option value="morning" selected>' in html
        assert f'<option value="{app.config["PAYMENT_METHODS"][0]}" selected>' in html


class TestCreateExpense:
    def test_valid_submit_inserts_one_record(self, app, client, user):
        resp = client.post("/expenses/", data=_form(app, item_name="  Lunch  "))
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/dashboard/")
        exp = Expense.query.one()
        assert exp.user_id == user.id
        assert exp.item_name == "Lunch"
        assert exp.amount == 12.5
        assert exp.time_period == "midday"

    def test_redirected_form_is_reset(self, app, client):
        resp = client.post("/expenses/", data=_form(app, item_name="Noodles"), follow_redirects=True)
        html = resp.get_data(as_text=True)
        assert "Saved Noodles" in html
        assert 'id="item_name" name="item_name" type="text" placeholder="e.g. Lunch" value=""' in html
        assert '<option value="morning" selected>' in html

    def test_submit_sends_signal_and_change(self, app, client):
        received, changes = [], []

        def on_added(sender, expense=None, **extra):
            received.append(expense.item_name)

        expense_added.connect(on_added)
        try:
            with get_feed(app).subscribe(changes.append):
                client.post("/expenses/", data=_form(app))
        finally:
            expense_added.disconnect(on_added)
        assert received == ["Lunch"]
        assert changes == ["expenses"]

    def test_double_submit_creates_two_records(self, app, client):
        client.post("/expenses/", data=_form(app))
        client.post("/expenses/", data=_form(app))
        assert Expense.query.count() == 2

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"amount": ""}, "Please enter a valid amount"),
            ({"amount": "abc"}, "Please enter a valid amount"),
            ({"amount": "-3"}, "Please enter a valid amount"),
            ({"amount": "0"}, "Please enter a valid amount"),
            ({"amount": "nan"}, "Please enter a valid amount"),
            ({"amount": "0.004"}, "Please enter a valid amount"),
            ({"item_name": "   "}, "Item name is required"),
            ({"date": "2024-02-30"}, "Please enter a valid date"),
            ({"time_period": "midnight"}, "Please choose a time period"),
            ({"payment_method": "Cash under the mattress"}, "Please choose a payment method"),
        ],
    )
    def test_invalid_submit_keeps_form_populated(self, app, client, overrides, message):
        data = _form(app, item_name="Dinner")
        data.update(overrides)
        resp = client.post("/expenses/", data=data)
        assert resp.status_code == 400
        html = resp.get_data(as_text=True)
        assert message in html
        assert Expense.query.count() == 0
        if "item_name" not in overrides:
            assert 'value="Dinner"' in html

    def test_empty_date_means_today(self, app, client):
        client.post("/expenses/", data=_form(app, date=""))
        assert Expense.query.one().date == date.today()

    def test_store_failure_is_reported(self, app, client):
        error = OperationalError("INSERT", {}, Exception("database is locked"))
        with patch.object(ExpenseStore, "insert", side_effect=error):
            resp = client.post("/expenses/", data=_form(app, item_name="Taxi"))
        assert resp.status_code == 500
        html = resp.get_data(as_text=True)
        assert "Could not save the expense, please try again" in html
        assert 'value="Taxi"' in html


class TestParseAmount:
    def test_rounds_to_cents(self):
        assert parse_amount(" 12.3456 ") == 12.35
        assert parse_amount("0.005") == 0.01

    @pytest.mark.parametrize("raw", ["0.004", "0.0001", "-0.001"])
    def test_rejects_amounts_that_round_to_zero(self, raw):
        with pytest.raises(ExpenseValidationError) as exc:
            parse_amount(raw)
        assert exc.value.field == "amount"
