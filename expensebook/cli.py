from datetime import date, timedelta
import click
from flask import current_app
from .extensions import db
from .models import Expense, User
from .store import ExpenseStore


DEMO_EXPENSES = [
    # (days ago, time period, item, amount, payment method index)
    (0, "morning", "Breakfast", 12.50, 0),
    (0, "midday", "Lunch", 28.00, 4),
    (1, "evening", "Groceries", 86.30, 3),
    (2, "afternoon", "Coffee", 7.30, 1),
    (3, "evening", "Cinema", 45.00, 2),
]


def seed_demo(email, password="demo123", today=None):
    """Create the demo account if needed and give it a few days of expenses."""
    today = today or date.today()
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

    if Expense.query.filter_by(user_id=user.id).first():
        return user, 0

    methods = current_app.config["PAYMENT_METHODS"]
    store = ExpenseStore.for_user(db, user)
    for days_ago, period, item, amount, method in DEMO_EXPENSES:
        store.insert(
            date=today - timedelta(days=days_ago),
            time_period=period,
            item_name=item,
            amount=amount,
            payment_method=methods[method % len(methods)],
        )
    return user, len(DEMO_EXPENSES)


def register_commands(app):
    @app.cli.command("seed-demo")
    @click.argument("email")
    @click.option("--password", default="demo123", show_default=True, help="Password for a newly created account.")
    def seed_demo_command(email, password):
        """Seed EMAIL's account with demo expenses."""
        user, created = seed_demo(email.strip().lower(), password)
        if created:
            click.echo(f"Added {created} demo expenses for {user.email}")
        else:
            click.echo(f"{user.email} already has expenses, nothing added")
