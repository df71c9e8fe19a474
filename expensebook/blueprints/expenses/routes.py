import logging
from flask import Blueprint, request, redirect, url_for, flash, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from ...extensions import db
from ...events import expense_added
from ...forms import ExpenseValidationError, parse_expense_form
from ...store import ExpenseStore
from ..dashboard.routes import render_home


expenses_bp = Blueprint("expenses", __name__, url_prefix="/expenses")
logger = logging.getLogger(__name__)


def _submitted_values():
    return {key: request.form.get(key, "") for key in ("date", "time_period", "item_name", "amount", "payment_method")}


@expenses_bp.route("/", methods=["POST"])
@login_required
def create_expense():
    cfg = current_app.config
    try:
        fields = parse_expense_form(request.form, cfg["TIME_PERIODS"], cfg["PAYMENT_METHODS"])
    except ExpenseValidationError as e:
        flash(e.message, "danger")
        return render_home(form_values=_submitted_values(), errors={e.field: e.message}, status=400)

    store = ExpenseStore.for_user(db, current_user)
    try:
        expense = store.insert(**fields)
    except SQLAlchemyError:
        logger.exception("Could not save expense for user %s", current_user.id)
        flash("Could not save the expense, please try again", "danger")
        return render_home(form_values=_submitted_values(), status=500)

    expense_added.send(current_app._get_current_object(), expense=expense)
    flash(f"Saved {expense.item_name}", "success")
    return redirect(url_for("dashboard.index"))
