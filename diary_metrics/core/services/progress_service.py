# diary_metrics/core/services/progress_service.py
import logging
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from diary_metrics.config.config_manager import ConfigManager
from diary_metrics.core.analysis.calculations import validate_entry_times, with_derived_measures
from diary_metrics.core.analysis.comparison import compare, diff
from diary_metrics.core.analysis.sleep_metrics import summarize
from diary_metrics.core.analysis.windows import (
    baseline_entries,
    entries_in_range,
    previous_week_range,
    week_date_range,
)
from diary_metrics.core.models.data_models import DiaryEntry, ProgressReport
from diary_metrics.core.recommendation.titration import get_titration_recommendation
from diary_metrics.utils.data_validation import parse_diary_frame

logger = logging.getLogger(__name__)


class ProgressService:
    """Builds a patient's weekly progress from the entries the caller supplies."""

    def __init__(self, config=None):
        self.config = config or ConfigManager()
        self.total_days = self.config.get('window.total_days', 7)
        self.baseline_days = self.config.get('window.baseline_days', 7)

    def build_comparison(self,
                         entries: Iterable[DiaryEntry],
                         as_of: date,
                         current_window_minutes: Optional[int] = None) -> ProgressReport:
        """
        Summarize the current week, previous week and baseline and compare them.

        TIB, TWT, TST and SE missing from an entry are derived from its clock
        times first; out-of-order clock times are logged as warnings.

        Args:
            entries: All diary entries for one patient
            as_of: Last day of the current week
            current_window_minutes: Prescribed sleep window, for the titration step

        Returns:
            ProgressReport
        """
        entries = [with_derived_measures(entry) for entry in entries]
        for entry in entries:
            for error in validate_entry_times(entry):
                logger.warning(f"Diary entry {entry.id} on {entry.date}: {error}")

        current_range = week_date_range(as_of, self.total_days)
        previous_range = previous_week_range(as_of, self.total_days)

        current_entries = entries_in_range(entries, *current_range)
        previous_entries = entries_in_range(entries, *previous_range)
        baseline = baseline_entries(entries, self.baseline_days, as_of=as_of)

        current = summarize(current_entries, self.total_days)
        previous = summarize(previous_entries, self.total_days)
        # Baseline window covers however many entries were available
        baseline_summary = summarize(baseline, len(baseline))
        baseline_range = (baseline[0].date, baseline[-1].date) if baseline else None

        comparison = compare(current, previous, baseline_summary)
        logger.info(
            f"Progress as of {as_of}: {current.days_logged}/{current.total_days} days logged, "
            f"SE {current.avg_se} (previous {previous.avg_se}, baseline {baseline_summary.avg_se})"
        )

        if current_window_minutes is None:
            current_window_minutes = self.config.get('titration.default_window_minutes', 360)
        recommendation = get_titration_recommendation(
            current.avg_se,
            current.days_logged,
            current_window_minutes,
            min_window_minutes=self.config.get('titration.min_window_minutes', 300),
            increment=self.config.get('titration.increment_minutes', 15),
        )

        return ProgressReport(
            as_of=as_of,
            current_range=current_range,
            previous_range=previous_range,
            baseline_range=baseline_range,
            comparison=comparison,
            se_diff_from_previous=diff(current.avg_se, previous.avg_se),
            se_diff_from_baseline=diff(current.avg_se, baseline_summary.avg_se),
            completion_rate=current.completion_rate,
            recommendation=recommendation,
        )

    def build_comparison_from_frame(self,
                                    frame: pd.DataFrame,
                                    as_of: date,
                                    current_window_minutes: Optional[int] = None) -> ProgressReport:
        """Same as ``build_comparison`` for a DataFrame of raw diary rows."""
        entries = parse_diary_frame(frame)
        return self.build_comparison(entries, as_of, current_window_minutes)
