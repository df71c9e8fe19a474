import csv
import logging
from io import StringIO
from flask import Blueprint, render_template, request, make_response, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from ...extensions import db
from ...periods import normalize_period, resolve_period
from ...report import build_report
from ...store import ExpenseStore

stats_bp = Blueprint("stats", __name__, url_prefix="/stats")
logger = logging.getLogger(__name__)


def selected_period():
    return normalize_period(request.args.get("period"), current_app.config["STATS_PERIODS"])


def current_report():
    store = ExpenseStore.for_user(db, current_user)
    return build_report(
        store,
        selected_period(),
        page=request.args.get("page", 1),
        per_page=current_app.config["PAGE_SIZE"],
    )


@stats_bp.route("/")
@login_required
def index():
    report = current_report()
    return render_template("stats/index.html", report=report)


@stats_bp.route("/export.csv")
@login_required
def export_csv():
    period = selected_period()
    window = resolve_period(period)
    store = ExpenseStore.for_user(db, current_user)
    try:
        records = store.records_between(window.start, window.end)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("CSV export failed for user %s", current_user.id)
        records = []

    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Time period", "Item", "Amount", "Payment method"])
    for exp in records:
        writer.writerow([exp.date.isoformat(), exp.time_period, exp.item_name, f"{exp.amount:.2f}", exp.payment_method])
    response = make_response(output.getvalue())
    response.headers["Content-Disposition"] = f"attachment; filename=expenses-{period}.csv"
    response.headers["Content-Type"] = "text/csv"
    return response
