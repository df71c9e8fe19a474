import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .charts import build_charts
from .pagination import page_links
from .periods import DateRange, resolve_period
from .stats import PeriodStats, summarize

logger = logging.getLogger(__name__)

STATS_UNAVAILABLE = "Statistics are unavailable right now."


@dataclass
class EmptyPage:
    page: int = 1
    per_page: int = 10
    items: List[Any] = field(default_factory=list)
    total: int = 0
    pages: int = 0
    has_prev: bool = False
    has_next: bool = False
    prev_num: Optional[int] = None
    next_num: Optional[int] = None


@dataclass
class StatsReport:
    period: str
    range: DateRange
    stats: PeriodStats
    charts: Optional[dict]
    page: Any
    error: Optional[str] = None

    @property
    def empty(self):
        return self.charts is None

    @property
    def links(self):
        return page_links(self.page.page, self.page.pages)

    def to_dict(self):
        return {
            "period": self.period,
            "start": self.range.start.isoformat(),
            "end": self.range.end.isoformat(),
            "stats": self.stats.to_dict(),
            "charts": self.charts,
            "records": [e.to_dict() for e in self.page.items],
            "pagination": {
                "page": self.page.page,
                "pages": self.page.pages,
                "total": self.page.total,
                "has_prev": self.page.has_prev,
                "has_next": self.page.has_next,
                "links": self.links,
            },
            "error": self.error,
        }


def build_report(store, period, page=1, per_page=10, today=None):
    """Resolve ``period`` and gather chart rows, aggregates and one list page.

    Store failures are logged and produce an empty report.
    """
    window = resolve_period(period, today or date.today())
    try:
        rows = store.chart_rows(window.start, window.end)
        records = store.page_between(window.start, window.end, page=page, per_page=per_page)
    except SQLAlchemyError:
        store.session.rollback()
        logger.exception("Could not load %s statistics for user %s", period, store.owner_id)
        return StatsReport(
            period=period,
            range=window,
            stats=PeriodStats(),
            charts=None,
            page=EmptyPage(per_page=per_page),
            error=STATS_UNAVAILABLE,
        )

    return StatsReport(
        period=period,
        range=window,
        stats=summarize(rows),
        charts=build_charts(rows, period),
        page=records,
    )
