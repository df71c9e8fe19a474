"""ECharts option builders for the statistics page.

Everything here is a pure function of the rows passed in; the template
serialises the returned dictionaries with ``tojson``.
"""
from .stats import totals_by

LINE_COLOR = "#3b82f6"
BAR_COLOR = "#10b981"

PERIOD_TITLES = {
    "day": "Today",
    "week": "This week",
    "month": "Last month",
    "year": "Last year",
}


def _iso(value):
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


def daily_buckets(rows):
    """Return ``[(iso_date, amount), ...]`` sorted by ISO date string."""
    per_day = {}
    for row in rows:
        key = _iso(row.date)
        per_day[key] = per_day.get(key, 0.0) + float(row.amount)
    return [(day, round(per_day[day], 2)) for day in sorted(per_day)]


def _axis_chart(title, buckets, series):
    return {
        "title": {"text": title, "left": "center"},
        "tooltip": {"trigger": "axis"},
        "grid": {"left": "5%", "right": "5%", "bottom": "10%", "containLabel": True},
        "xAxis": {"type": "category", "data": [day for day, _ in buckets]},
        "yAxis": {"type": "value"},
        "series": [dict(series, data=[amount for _, amount in buckets])],
    }


def line_chart(buckets, period):
    return _axis_chart(
        f"Spending trend ({PERIOD_TITLES.get(period, period)})",
        buckets,
        {
            "type": "line",
            "smooth": True,
            "itemStyle": {"color": LINE_COLOR},
            "areaStyle": {
                "color": {
                    "type": "linear",
                    "x": 0, "y": 0, "x2": 0, "y2": 1,
                    "colorStops": [
                        {"offset": 0, "color": "rgba(59, 130, 246, 0.3)"},
                        {"offset": 1, "color": "rgba(59, 130, 246, 0.05)"},
                    ],
                },
            },
        },
    )


def bar_chart(buckets, period):
    return _axis_chart(
        f"Spending per day ({PERIOD_TITLES.get(period, period)})",
        buckets,
        {"type": "bar", "itemStyle": {"color": BAR_COLOR}},
    )


def pie_chart(rows):
    by_method = totals_by(rows, "payment_method")
    return {
        "title": {"text": "Payment methods", "left": "center"},
        "tooltip": {"trigger": "item", "formatter": "{a} <br/>{b}: {c} ({d}%)"},
        "legend": {"orient": "vertical", "left": "left"},
        "series": [
            {
                "name": "Payment method",
                "type": "pie",
                "radius": "60%",
                "data": [{"name": name, "value": round(value, 2)} for name, value in by_method.items()],
                "emphasis": {
                    "itemStyle": {"shadowBlur": 10, "shadowOffsetX": 0, "shadowColor": "rgba(0, 0, 0, 0.5)"},
                },
            }
        ],
    }


def build_charts(rows, period):
    """Build the line, pie and bar options, or ``None`` when there is no data."""
    rows = list(rows)
    if not rows:
        return None
    buckets = daily_buckets(rows)
    return {
        "line": line_chart(buckets, period),
        "pie": pie_chart(rows),
        "bar": bar_chart(buckets, period),
    }
