"""
Module for reducing daily diary entries into weekly summary statistics.
"""

import logging
from typing import Iterable

import pandas as pd

from diary_metrics.core.analysis.numeric import mean_of_present
from diary_metrics.core.models.data_models import DiaryEntry, WeeklySummary
from diary_metrics.utils.constants import measure_fields
from diary_metrics.utils.data_validation import parse_diary_frame

logger = logging.getLogger(__name__)


def summarize(entries: Iterable[DiaryEntry], total_days: int = 7) -> WeeklySummary:
    """
    Calculate the weekly summary for a window of diary entries.

    Args:
        entries: Diary entries for the window, in any order
        total_days: Intended length of the window; not checked against the
            number of entries, which may be lower (missed days) or higher

    Returns:
        WeeklySummary: Averages of every measure plus coverage counts
    """
    entries = list(entries)
    averages = {
        summary_field: mean_of_present(getattr(entry, measure) for entry in entries)
        for measure, summary_field in measure_fields.items()
    }
    logger.debug(f"Summarized {len(entries)} entries over a {total_days}-day window")
    return WeeklySummary(days_logged=len(entries), total_days=total_days, **averages)


def summarize_frame(frame: pd.DataFrame, total_days: int = 7, error_handling: str = 'raise') -> WeeklySummary:
    """
    Calculate the weekly summary from a DataFrame of raw diary rows.

    Rows go through the same boundary parser as any other untyped input, so
    out-of-range or non-numeric cells raise DiaryEntryValidationError (or are
    skipped when error_handling is 'filter'). A missing measure column is
    treated as never recorded; NaN is treated as not recorded.
    """
    entries = parse_diary_frame(frame, error_handling=error_handling)
    return summarize(entries, total_days)
