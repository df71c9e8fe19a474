"""JSON refresh endpoints and the change stream used by the live pages."""
import logging
from flask import Blueprint, Response, jsonify, current_app
from flask_login import login_required, current_user
from ...extensions import db
from ...events import get_feed
from ...store import ExpenseStore
from ...widgets import SummaryWidget, RecentWidget
from ..stats.routes import current_report

api_bp = Blueprint("api", __name__, url_prefix="/api")
logger = logging.getLogger(__name__)


def _store():
    return ExpenseStore.for_user(db, current_user)


@api_bp.route("/summary")
@login_required
def summary():
    widget = SummaryWidget(_store()).refresh()
    return jsonify(widget.to_dict())


@api_bp.route("/recent")
@login_required
def recent():
    widget = RecentWidget(_store(), days=current_app.config["RECENT_DAYS"]).refresh()
    return jsonify(widget.to_dict())


@api_bp.route("/stats")
@login_required
def stats():
    return jsonify(current_report().to_dict())


def change_stream(feed, heartbeat, owner_id):
    """Server-Sent Events for committed changes to ``owner_id``'s expenses."""
    with feed.subscribe_queue(owner_id=owner_id) as sub:
        yield "retry: 3000\n\n"
        while True:
            table = sub.get(timeout=heartbeat)
            if table is None:
                yield ": keep-alive\n\n"
            else:
                yield f"event: change\ndata: {table}\n\n"


@api_bp.route("/events")
@login_required
def events():
    logger.debug("User %s opened the change stream", current_user.id)
    stream = change_stream(get_feed(), current_app.config["EVENTS_HEARTBEAT"], current_user.id)
    return Response(
        stream,
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
