"""
Date window helpers for slicing diary entries into weeks.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from diary_metrics.core.models.data_models import DiaryEntry


def week_date_range(end_date: date, days: int = 7) -> Tuple[date, date]:
    """Return the inclusive range of ``days`` days ending on ``end_date``."""
    return end_date - timedelta(days=days - 1), end_date


def previous_week_range(end_date: date, days: int = 7) -> Tuple[date, date]:
    """Return the window immediately before the one ending on ``end_date``."""
    start, _ = week_date_range(end_date, days)
    return week_date_range(start - timedelta(days=1), days)


def entries_in_range(entries: Iterable[DiaryEntry], start: date, end: date) -> List[DiaryEntry]:
    """Entries dated between ``start`` and ``end`` inclusive, sorted by date."""
    return sorted((e for e in entries if start <= e.date <= end), key=lambda e: e.date)


def baseline_entries(entries: Iterable[DiaryEntry], days: int = 7, as_of: Optional[date] = None) -> List[DiaryEntry]:
    """
    The first ``days`` entries ever logged (or all of them if fewer).

    With ``as_of``, entries dated after it are never part of the baseline.
    """
    if as_of is not None:
        entries = (e for e in entries if e.date <= as_of)
    return sorted(entries, key=lambda e: e.date)[:days]
