"""Live-refreshing view models for the home page.

A widget owns its own state and re-runs its queries whenever it is told
something changed. ``mount`` wires it to the local ``expense_added`` signal
and to the owner's change feed; ``dispose`` (or leaving the ``with`` block)
removes both listeners.

Feed notifications arrive while the session is still finishing its commit, so
they only mark the widget stale; the queries re-run on the next read.
"""
import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from .events import expense_added
from .periods import month_to_date, trailing_days
from .stats import sum_amounts

logger = logging.getLogger(__name__)

REFRESH_FAILED = "Could not load your expenses"


def relative_day_label(day, today=None):
    today = today or date.today()
    delta = (today - day).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Yesterday"
    if delta == 2:
        return "2 days ago"
    return f"{day.strftime('%b')} {day.day}"


class LiveWidget:
    def __init__(self, store, today=None):
        self.store = store
        self._today = today
        self.error = None
        self.stale = False
        self._subscription = None
        self._signal_connected = False

    @property
    def today(self):
        return self._today() if callable(self._today) else (self._today or date.today())

    def load(self):
        raise NotImplementedError

    def reset(self):
        raise NotImplementedError

    def refresh(self):
        """Re-run the widget's queries; on failure fall back to an empty state."""
        self.error = None
        self.stale = False
        try:
            self.load()
        except SQLAlchemyError:
            self.store.session.rollback()
            logger.exception("%s refresh failed", type(self).__name__)
            self.error = REFRESH_FAILED
            self.reset()
        return self

    def sync(self):
        if self.stale:
            self.refresh()
        return self

    def _on_change(self, table):
        self.stale = True

    def _on_expense_added(self, sender, expense=None, **extra):
        if expense is None or expense.user_id == self.store.owner_id:
            self.refresh()

    def mount(self, feed):
        self.refresh()
        self._subscription = feed.subscribe(self._on_change, owner_id=self.store.owner_id)
        expense_added.connect(self._on_expense_added, weak=False)
        self._signal_connected = True
        return self

    def dispose(self):
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        if self._signal_connected:
            expense_added.disconnect(self._on_expense_added)
            self._signal_connected = False

    @property
    def mounted(self):
        return self._subscription is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()


class SummaryWidget(LiveWidget):
    """Today's and month-to-date totals."""

    _totals = (0.0, 0.0)

    @property
    def today_total(self):
        return self.sync()._totals[0]

    @property
    def month_total(self):
        return self.sync()._totals[1]

    def load(self):
        today = self.today
        month = month_to_date(today)
        self._totals = (
            sum_amounts(self.store.amounts_on(today)),
            sum_amounts(self.store.amounts_between(month.start, month.end)),
        )

    def reset(self):
        self._totals = (0.0, 0.0)

    def to_dict(self):
        return {
            "today_total": round(self.today_total, 2),
            "month_total": round(self.month_total, 2),
        }


class RecentWidget(LiveWidget):
    """Expenses from the last few days, newest first."""

    def __init__(self, store, days=3, today=None):
        super().__init__(store, today=today)
        self.days = days
        self._expenses = []

    @property
    def expenses(self):
        return self.sync()._expenses

    def load(self):
        window = trailing_days(self.days, self.today)
        self._expenses = self.store.recent(window.start, window.end)

    def reset(self):
        self._expenses = []

    def rows(self):
        today = self.today
        return [dict(e.to_dict(), label=relative_day_label(e.date, today)) for e in self.expenses]

    def to_dict(self):
        return {"expenses": self.rows()}
