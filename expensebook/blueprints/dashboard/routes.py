from flask import Blueprint, render_template, current_app
from flask_login import login_required, current_user
from ...extensions import db
from ...forms import form_defaults
from ...store import ExpenseStore
from ...widgets import SummaryWidget, RecentWidget


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


def render_home(form_values=None, errors=None, status=200):
    """Home page: summary, entry form and recent expenses."""
    cfg = current_app.config
    store = ExpenseStore.for_user(db, current_user)
    summary = SummaryWidget(store).refresh()
    recent = RecentWidget(store, days=cfg["RECENT_DAYS"]).refresh()
    values = form_values or form_defaults(cfg["TIME_PERIODS"], cfg["PAYMENT_METHODS"])
    return render_template(
        "dashboard/index.html",
        summary=summary,
        recent=recent.rows(),
        form=values,
        errors=errors or {},
    ), status


@dashboard_bp.route("/")
@login_required
def index():
    return render_home()
