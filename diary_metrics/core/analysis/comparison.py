"""
Module for comparing weekly summaries across time windows.

Sleep efficiency is the primary outcome measure, so the comparison reports
its percent change against the previous week and against the baseline week.
A change is None whenever either side is missing or the reference value is
zero; callers should read None as "insufficient data".
"""

import logging
from typing import Optional

from diary_metrics.core.analysis.numeric import round_half_away
from diary_metrics.core.models.data_models import MetricsComparison, WeeklySummary

logger = logging.getLogger(__name__)


def percent_change(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    """Percent change from ``previous`` to ``current``, one decimal."""
    if current is None or previous is None or previous == 0:
        return None
    return round_half_away(((current - previous) / previous) * 100, 1)


def diff(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    """Absolute difference ``current - previous``, one decimal."""
    if current is None or previous is None:
        return None
    return round_half_away(current - previous, 1)


def compare(current: WeeklySummary,
            previous: Optional[WeeklySummary] = None,
            baseline: Optional[WeeklySummary] = None) -> MetricsComparison:
    """
    Compare the current week against the previous week and the baseline.

    Args:
        current: Summary of the current window
        previous: Summary of the window before it, if any
        baseline: Summary of the fixed reference window, if any

    Returns:
        MetricsComparison: The three summaries and the sleep efficiency changes
    """
    se_change = percent_change(current.avg_se, previous.avg_se if previous else None)
    se_baseline_change = percent_change(current.avg_se, baseline.avg_se if baseline else None)

    if previous is not None and se_change is None:
        logger.debug("No sleep efficiency change against previous week (missing or zero data)")

    return MetricsComparison(
        current=current,
        previous=previous,
        baseline=baseline,
        se_change=se_change,
        se_baseline_change=se_baseline_change,
    )
