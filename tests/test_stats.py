from datetime import datetime, timedelta

from passgen.stats import compute_stats
from passgen.storage import HistoryItem

NOW = datetime(2026, 10, 16, 15, 30)


def item(strength="Strong", length=12, response_time=0.1, created_at=NOW):
    return HistoryItem(
        id=f"{strength}-{length}-{created_at.timestamp()}",
        password="x" * length,
        strength=strength,
        length=length,
        options={"upper": True, "lower": True, "numbers": True, "symbols": False},
        response_time=response_time,
        created_at=created_at.timestamp(),
    )


def test_empty_history():
    stats = compute_stats([], now=NOW, history_cap=20)

    assert stats == {
        "total_generated": 0,
        "generated_today": 0,
        "generated_this_week": 0,
        "average_length": 0,
        "average_response_time": 0,
        "strength_distribution": {},
        "history_cap": 20,
    }


def test_averages():
    stats = compute_stats(
        [item(length=8, response_time=0.1), item(length=16, response_time=0.4)], now=NOW
    )

    assert stats["total_generated"] == 2
    assert stats["average_length"] == 12
    assert stats["average_response_time"] == 0.25


def test_today_and_week_windows():
    items = [
        item(created_at=NOW - timedelta(hours=1)),
        item(created_at=NOW.replace(hour=0, minute=0)),
        item(created_at=NOW - timedelta(days=1)),
        item(created_at=NOW - timedelta(days=6, hours=23)),
        item(created_at=NOW - timedelta(days=8)),
    ]

    stats = compute_stats(items, now=NOW)

    assert stats["total_generated"] == 5
    assert stats["generated_today"] == 2
    assert stats["generated_this_week"] == 4


def test_strength_distribution_omits_absent_labels():
    stats = compute_stats([item("Weak"), item("Strong"), item("Strong")], now=NOW)

    assert stats["strength_distribution"] == {"Weak": 1, "Strong": 2}
    assert "Medium" not in stats["strength_distribution"]


def test_matches_store_snapshot(store):
    options = {"upper": False, "lower": False, "numbers": True, "symbols": False}
    for length in (4, 6, 8, 10):
        store.record("1" * length, "Weak", length, options, 0.02)

    stats = compute_stats(store.snapshot(), history_cap=store.cap)

    assert stats["total_generated"] == 3
    assert stats["generated_today"] == 3
    assert stats["average_length"] == 8
    assert stats["history_cap"] == 3
