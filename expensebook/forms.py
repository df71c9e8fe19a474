import math
from datetime import date


class ExpenseValidationError(ValueError):
    def __init__(self, field, message):
        super().__init__(message)
        self.field = field
        self.message = message


def parse_amount(raw):
    try:
        amount = float((raw or "").strip())
    except ValueError:
        raise ExpenseValidationError("amount", "Please enter a valid amount")
    if not math.isfinite(amount):
        raise ExpenseValidationError("amount", "Please enter a valid amount")
    # Amounts are kept to the cent; anything that rounds to zero is rejected.
    amount = round(amount, 2)
    if amount <= 0:
        raise ExpenseValidationError("amount", "Please enter a valid amount")
    return amount


def parse_expense_form(form, time_periods, payment_methods):
    """Validate the entry form and return the fields for one expense."""
    date_str = (form.get("date") or "").strip()
    try:
        spent_on = date.fromisoformat(date_str) if date_str else date.today()
    except ValueError:
        raise ExpenseValidationError("date", "Please enter a valid date")

    time_period = form.get("time_period")
    if time_period not in time_periods:
        raise ExpenseValidationError("time_period", "Please choose a time period")

    item_name = (form.get("item_name") or "").strip()
    if not item_name:
        raise ExpenseValidationError("item_name", "Item name is required")

    amount = parse_amount(form.get("amount"))

    payment_method = form.get("payment_method")
    if payment_method not in payment_methods:
        raise ExpenseValidationError("payment_method", "Please choose a payment method")

    return {
        "date": spent_on,
        "time_period": time_period,
        "item_name": item_name,
        "amount": amount,
        "payment_method": payment_method,
    }


def form_defaults(time_periods, payment_methods, today=None):
    return {
        "date": (today or date.today()).isoformat(),
        "time_period": time_periods[0],
        "item_name": "",
        "amount": "",
        "payment_method": payment_methods[0],
    }
