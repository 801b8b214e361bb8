"""
Display formatting for engine output.

Every function here is pure: it takes a value that may be None and returns a
fixed-shape display token. The thresholds and symbols come from
``diary_metrics.utils.constants`` and are relied on by the display layer.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

from diary_metrics.core.analysis.numeric import round_to_int
from diary_metrics.core.models.data_models import SeverityBand, TrendArrow, TrendDescriptor
from diary_metrics.utils.constants import (
    efficiency_badge_classes,
    efficiency_color_classes,
    efficiency_thresholds,
    higher_is_better,
    placeholder,
    quality_symbols,
    unknown_quality_symbol,
)


def format_duration_hm(minutes: Optional[float]) -> str:
    """
    Format minutes as hours and minutes (e.g. "5h 30m").

    Hours are the whole hours in ``minutes`` and the remainder is rounded on
    its own, so 119.6 reads "1h 60m". The hours segment is dropped when zero
    and so is the minutes segment, except that zero minutes overall reads "0m".
    """
    if minutes is None:
        return placeholder
    hours = math.floor(minutes / 60)
    mins = round_to_int(minutes % 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage such as sleep efficiency ("88%")."""
    if value is None:
        return placeholder
    return f"{round_to_int(value)}%"


def efficiency_severity(se: Optional[float]) -> SeverityBand:
    """Classify sleep efficiency into its display band."""
    if se is None:
        return SeverityBand.NEUTRAL
    for threshold, band in efficiency_thresholds:
        if se >= threshold:
            return SeverityBand(band)
    return SeverityBand.POOR


def efficiency_color_class(se: Optional[float]) -> str:
    return efficiency_color_classes[efficiency_severity(se).value]


def efficiency_badge_class(se: Optional[float]) -> str:
    return efficiency_badge_classes[efficiency_severity(se).value]


def _format_magnitude(value: float) -> str:
    # Whole numbers render without a trailing ".0"
    value = abs(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_trend(diff: Optional[float], inverse: bool = False) -> Optional[TrendDescriptor]:
    """
    Describe a change for display.

    Args:
        diff: Signed change, e.g. from ``comparison.diff``
        inverse: True for measures where a decrease is an improvement,
            such as sleep onset latency

    Returns:
        TrendDescriptor or None when there is no change to describe
    """
    if diff is None:
        return None

    if diff > 0:
        arrow = TrendArrow.UP
    elif diff < 0:
        arrow = TrendArrow.DOWN
    else:
        arrow = TrendArrow.FLAT

    favorable = diff < 0 if inverse else diff > 0
    return TrendDescriptor(arrow=arrow, favorable=favorable, magnitude=_format_magnitude(diff))


def describe_metric_trend(metric: str, diff: Optional[float]) -> Optional[TrendDescriptor]:
    """Describe a change in ``metric`` using its clinical direction."""
    return format_trend(diff, inverse=not higher_is_better[metric])


def completion_rate(logged: int, total: int) -> int:
    """Diary completion as an integer percentage."""
    if total == 0:
        return 0
    return round_to_int(logged / total * 100)


def quality_symbol(rating: Optional[int]) -> str:
    """Symbol for a 1-5 quality rating; anything else is unknown."""
    if rating is None or isinstance(rating, bool):
        return unknown_quality_symbol
    return quality_symbols.get(rating, unknown_quality_symbol)


def format_time_from_iso(value: Optional[Union[str, datetime]]) -> str:
    """Format a timestamp as 12-hour clock time ("11:05 PM")."""
    if not value:
        return placeholder
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))
    hour = value.hour % 12 or 12
    period = 'PM' if value.hour >= 12 else 'AM'
    return f"{hour}:{value.minute:02d} {period}"


def format_date_range(start: date, end: date) -> str:
    """Format a window as "Jan 5 - Jan 11"."""
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}"
