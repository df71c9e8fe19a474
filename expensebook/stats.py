from dataclasses import dataclass, asdict


@dataclass
class PeriodStats:
    total: float = 0.0
    average: float = 0.0
    max: float = 0.0
    most_used_method: str = ""

    def to_dict(self):
        data = asdict(self)
        for key in ("total", "average", "max"):
            data[key] = round(data[key], 2)
        return data


def sum_amounts(amounts):
    return float(sum(float(a) for a in amounts))


def totals_by(rows, key):
    """Sum ``amount`` per ``key``, keeping first-encountered key order."""
    totals = {}
    for row in rows:
        k = getattr(row, key)
        totals[k] = totals.get(k, 0.0) + float(row.amount)
    return totals


def summarize(rows):
    """Aggregate chart rows (``date``, ``amount``, ``payment_method``).

    The average is per day *with* spending: dates with no rows are not in the
    denominator. The most used payment method is the one with the largest
    summed amount; ties keep the method seen first.
    """
    rows = list(rows)
    if not rows:
        return PeriodStats()

    total = sum_amounts(r.amount for r in rows)
    distinct_dates = {r.date for r in rows}
    by_method = totals_by(rows, "payment_method")

    most_used, best = "", None
    for method, amount in by_method.items():
        if best is None or amount > best:
            most_used, best = method, amount

    return PeriodStats(
        total=total,
        average=total / len(distinct_dates),
        max=max(float(r.amount) for r in rows),
        most_used_method=most_used,
    )
