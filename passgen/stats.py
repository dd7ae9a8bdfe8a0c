from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

WEEK = timedelta(days=7)


def compute_stats(
    items: Iterable, now: Optional[datetime] = None, history_cap: Optional[int] = None
) -> Dict:
    """
    Summarize a history snapshot.

    ``total_generated`` counts retained items only, so it never exceeds the
    store's cap; ``history_cap`` is echoed back so callers can see that bound.
    "Today" is the local calendar day of ``now``, "this week" the seven days
    ending at ``now``.
    """
    items = list(items)
    now = now or datetime.now()
    today = now.date()
    week_start = now - WEEK

    created = [datetime.fromtimestamp(item.created_at) for item in items]
    lengths = [item.length for item in items]
    response_times = [item.response_time for item in items]

    return {
        "total_generated": len(items),
        "generated_today": sum(1 for ts in created if ts.date() == today),
        "generated_this_week": sum(1 for ts in created if week_start <= ts <= now),
        "average_length": (
            round(sum(lengths) / len(lengths), 2) if lengths else 0
        ),
        "average_response_time": (
            round(sum(response_times) / len(response_times), 2)
            if response_times
            else 0
        ),
        "strength_distribution": dict(Counter(item.strength for item in items)),
        "history_cap": history_cap,
    }
