"""Change notifications for the ``expenses`` table.

Two channels exist:

* ``expense_added`` is a blinker signal sent by the entry form right after a
  successful insert, with the new record as ``expense``.
* :class:`ChangeFeed` publishes a notification after any commit that inserted,
  updated or deleted an expense. It carries only the table name, so listeners
  always re-fetch. A subscription opened for an owner only hears about commits
  that touched that owner's expenses.

Both may fire for the same write. Feed callbacks run inside the session's
``after_commit`` hook, where no SQL may be issued; listeners record the change
and query later.
"""
import logging
import queue
import threading

from blinker import Namespace
from flask import current_app, has_app_context
from sqlalchemy import event
from sqlalchemy.orm import Session

from .models import Expense

logger = logging.getLogger(__name__)

signals = Namespace()
expense_added = signals.signal("expense-added")

TABLE = Expense.__tablename__
_PENDING_KEY = "expensebook.changed_owners"


class Subscription:
    """Handle returned by :meth:`ChangeFeed.subscribe`.

    Closing is idempotent; use it as a context manager to guarantee the
    listener is removed.
    """

    def __init__(self, feed, callback, owner_id=None):
        self._feed = feed
        self.callback = callback
        self.owner_id = owner_id
        self.closed = False

    def wants(self, owners):
        return self.owner_id is None or self.owner_id in owners

    def close(self):
        if not self.closed:
            self._feed._remove(self)
            self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class QueueSubscription(Subscription):
    """A subscription that buffers notifications for a consumer thread."""

    def __init__(self, feed, maxsize=100, owner_id=None):
        self.queue = queue.Queue(maxsize=maxsize)
        super().__init__(feed, self._enqueue, owner_id=owner_id)

    def _enqueue(self, table):
        try:
            self.queue.put_nowait(table)
        except queue.Full:
            # Every notification means "re-fetch", one pending is enough.
            pass

    def get(self, timeout=None):
        """Next table name, or ``None`` when ``timeout`` elapses first."""
        try:
            return self.queue.get(timeout=timeout)
        except queue.Empty:
            return None


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers = []

    def _add(self, sub):
        with self._lock:
            self._subscribers.append(sub)
        return sub

    def subscribe(self, callback, owner_id=None):
        """Call ``callback(table)`` after each change.

        With ``owner_id`` only changes to that owner's expenses are delivered.
        """
        return self._add(Subscription(self, callback, owner_id=owner_id))

    def subscribe_queue(self, maxsize=100, owner_id=None):
        return self._add(QueueSubscription(self, maxsize=maxsize, owner_id=owner_id))

    def _remove(self, sub):
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)

    @property
    def subscriber_count(self):
        with self._lock:
            return len(self._subscribers)

    def publish(self, owners=(), table=TABLE):
        """Notify subscribers of a change to the expenses of ``owners``."""
        owners = frozenset(owners)
        with self._lock:
            subscribers = [sub for sub in self._subscribers if sub.wants(owners)]
        logger.debug("Change on %s for %d owner(s) -> %d subscriber(s)", table, len(owners), len(subscribers))
        for sub in subscribers:
            try:
                sub.callback(table)
            except Exception:
                logger.exception("Change listener failed")

    # -- Flask wiring --------------------------------------------------

    def init_app(self, app):
        app.extensions["change_feed"] = self
        install_listeners()


def get_feed(app=None):
    app = app or current_app
    return app.extensions["change_feed"]


# -- SQLAlchemy wiring -------------------------------------------------
#
# Listeners are attached once to the Session class; each commit publishes to
# the feed of the application that is active at the time.

def _collect(session, flush_context):
    owners = {
        obj.user_id
        for obj in list(session.new) + list(session.dirty) + list(session.deleted)
        if isinstance(obj, Expense)
    }
    if owners:
        session.info.setdefault(_PENDING_KEY, set()).update(owners)


def _publish_pending(session):
    owners = session.info.pop(_PENDING_KEY, None)
    if not owners:
        return
    if has_app_context() and "change_feed" in current_app.extensions:
        get_feed().publish(owners)


def _discard_pending(session):
    session.info.pop(_PENDING_KEY, None)


_LISTENERS = (
    ("after_flush", _collect),
    ("after_commit", _publish_pending),
    ("after_rollback", _discard_pending),
)


def install_listeners(session_cls=Session):
    for name, fn in _LISTENERS:
        if not event.contains(session_cls, name, fn):
            event.listen(session_cls, name, fn)
