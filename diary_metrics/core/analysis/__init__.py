"""
Analysis module for sleep diary data.

This module contains the aggregator, the comparator, the derivation of a
night's measures from its clock times and the date window helpers used to
slice entries into weeks.
"""

from diary_metrics.core.analysis.calculations import calculate_sleep_metrics, with_derived_measures
from diary_metrics.core.analysis.comparison import compare, diff, percent_change
from diary_metrics.core.analysis.sleep_metrics import summarize, summarize_frame

__all__ = [
    'summarize', 'summarize_frame', 'compare', 'diff', 'percent_change',
    'calculate_sleep_metrics', 'with_derived_measures',
]
