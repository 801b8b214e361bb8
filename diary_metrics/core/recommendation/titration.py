# diary_metrics/core/recommendation/titration.py
"""
Sleep window titration for CBT-I sleep restriction.

Clinical guidelines applied to the weekly average sleep efficiency:
- SE >= 90%: increase the window by 15 minutes (excellent consolidation)
- SE 85-89%: maintain the current window (good progress)
- SE 80-84%: clinical judgment needed (borderline)
- SE < 80%: decrease the window, or review if already at the minimum
"""

import logging
from typing import Optional

from diary_metrics.core.analysis.numeric import round_to_int
from diary_metrics.core.models.data_models import (
    Confidence,
    Prescription,
    TitrationAction,
    TitrationRecommendation,
)
from diary_metrics.utils.constants import (
    default_values,
    titration_action_badges,
    titration_action_labels,
    titration_thresholds,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440


def get_titration_recommendation(weekly_avg_se: Optional[float],
                                 days_logged: int,
                                 current_window_minutes: int,
                                 min_window_minutes: int = default_values['min_window_minutes'],
                                 increment: int = default_values['titration_increment']) -> TitrationRecommendation:
    """
    Recommend a sleep window adjustment from a week of diary data.

    Args:
        weekly_avg_se: Average sleep efficiency for the week (0-100) or None
        days_logged: Number of diary entries in the week
        current_window_minutes: Currently prescribed sleep window
        min_window_minutes: Floor the window is never reduced below
        increment: Minutes added or removed per adjustment

    Returns:
        TitrationRecommendation
    """
    if weekly_avg_se is None or days_logged < default_values['min_days_for_recommendation']:
        return TitrationRecommendation(
            action=TitrationAction.MAINTAIN,
            minutes=0,
            reason=('Not enough diary data to make a recommendation. '
                    f"Need at least {default_values['min_days_for_recommendation']} days logged."),
            confidence=Confidence.LOW,
            weekly_avg_se=weekly_avg_se,
            days_logged=days_logged,
        )

    if days_logged >= default_values['min_days_for_confidence']:
        confidence = Confidence.HIGH
    else:
        confidence = Confidence.MEDIUM
    se_display = round_to_int(weekly_avg_se)

    if weekly_avg_se >= titration_thresholds['excellent']:
        action, minutes = TitrationAction.INCREASE, increment
        reason = (f"Sleep efficiency {se_display}% exceeds 90%, indicating excellent sleep consolidation. "
                  f"Recommend expanding sleep window by {increment} minutes.")
    elif weekly_avg_se >= titration_thresholds['good']:
        action, minutes = TitrationAction.MAINTAIN, 0
        reason = (f"Sleep efficiency {se_display}% is in the 85-89% range, indicating good progress. "
                  "Recommend maintaining current sleep window.")
    elif weekly_avg_se >= titration_thresholds['borderline']:
        action, minutes, confidence = TitrationAction.REVIEW, 0, Confidence.MEDIUM
        reason = (f"Sleep efficiency {se_display}% is borderline (80-84%). Clinical judgment recommended - "
                  "consider maintaining or decreasing window based on patient factors.")
    elif current_window_minutes > min_window_minutes:
        action, minutes = TitrationAction.DECREASE, increment
        reason = (f"Sleep efficiency {se_display}% is below 80%, suggesting the sleep window may be too large. "
                  f"Recommend restricting by {increment} minutes.")
    else:
        action, minutes, confidence = TitrationAction.REVIEW, 0, Confidence.MEDIUM
        reason = (f"Sleep efficiency {se_display}% is below 80% but patient is already at minimum sleep window "
                  f"({round_to_int(min_window_minutes / 60)} hours). Clinical review recommended.")

    logger.debug(f"Titration for SE {weekly_avg_se} over {days_logged} days: {action.value}")
    return TitrationRecommendation(
        action=action,
        minutes=minutes,
        reason=reason,
        confidence=confidence,
        weekly_avg_se=weekly_avg_se,
        days_logged=days_logged,
    )


def _parse_clock(value: str) -> int:
    hours, minutes = (int(part) for part in value.split(':'))
    return hours * 60 + minutes


def _format_clock(total_minutes: int) -> str:
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def calculate_new_prescription(prescription: Prescription,
                               action: TitrationAction,
                               minutes: int,
                               anchor: str = 'waketime') -> Prescription:
    """
    Apply a titration step to a prescribed sleep window.

    With the ``'waketime'`` anchor the wake time stays fixed and bedtime moves
    (earlier to increase, later to decrease); with ``'bedtime'`` the bedtime
    stays fixed and the wake time moves.
    """
    if anchor not in ('waketime', 'bedtime'):
        raise ValueError(f"Invalid anchor '{anchor}'. Must be one of: waketime, bedtime")

    if action in (TitrationAction.MAINTAIN, TitrationAction.REVIEW) or minutes == 0:
        return prescription

    adjustment = minutes if action == TitrationAction.INCREASE else -minutes
    bedtime, wake_time = prescription.bedtime, prescription.wake_time
    if anchor == 'waketime':
        bedtime = _format_clock(_parse_clock(bedtime) - adjustment)
    else:
        wake_time = _format_clock(_parse_clock(wake_time) + adjustment)

    return Prescription(
        bedtime=bedtime,
        wake_time=wake_time,
        window_minutes=prescription.window_minutes + adjustment,
    )


def calculate_window_minutes(bedtime: str, wake_time: str) -> int:
    """Sleep window length, wrapping past midnight when wake time is earlier."""
    bed = _parse_clock(bedtime)
    wake = _parse_clock(wake_time)
    if wake < bed:
        return (MINUTES_PER_DAY - bed) + wake
    return wake - bed


def format_prescription_time(value: str) -> str:
    """Format "HH:MM" as 12-hour clock time ("11:30 PM")."""
    hours, minutes = (int(part) for part in value.split(':'))
    period = 'PM' if hours >= 12 else 'AM'
    return f"{hours % 12 or 12}:{minutes:02d} {period}"


def action_label(action: TitrationAction) -> str:
    return titration_action_labels[TitrationAction(action).value]


def action_badge_class(action: TitrationAction) -> str:
    return titration_action_badges[TitrationAction(action).value]
