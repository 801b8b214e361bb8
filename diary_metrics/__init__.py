"""
Sleep diary metrics engine.

Turns daily sleep diary entries into weekly summaries, compares them against
the previous week and a baseline week, and formats the results for display.
"""

from diary_metrics.core.analysis.comparison import compare, diff, percent_change
from diary_metrics.core.analysis.sleep_metrics import summarize, summarize_frame
from diary_metrics.core.models.data_models import DiaryEntry, MetricsComparison, WeeklySummary

__version__ = "0.1.0"

__all__ = [
    'DiaryEntry',
    'WeeklySummary',
    'MetricsComparison',
    'summarize',
    'summarize_frame',
    'compare',
    'diff',
    'percent_change',
]
