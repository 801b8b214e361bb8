"""
Module for rendering weekly progress as display-ready text.
"""

from datetime import datetime
from typing import Dict, Optional

from diary_metrics.core.analysis.comparison import diff
from diary_metrics.core.models.data_models import ProgressReport, WeeklySummary
from diary_metrics.core.recommendation.titration import action_label
from diary_metrics.core.reporting.formatters import (
    describe_metric_trend,
    efficiency_severity,
    format_date_range,
    format_duration_hm,
    format_percentage,
)
from diary_metrics.utils.constants import placeholder

# (label, summary field, measure, formatter) in display order
SUMMARY_ROWS = [
    ('Sleep Efficiency', 'avg_se', 'se', format_percentage),
    ('Total Sleep Time', 'avg_tst', 'tst', format_duration_hm),
    ('Time In Bed', 'avg_tib', 'tib', format_duration_hm),
    ('Sleep Onset Latency', 'avg_sol', 'sol', format_duration_hm),
    ('Wake After Sleep Onset', 'avg_waso', 'waso', format_duration_hm),
    ('Early Morning Awakening', 'avg_ema', 'ema', format_duration_hm),
    ('Total Wake Time', 'avg_twt', 'twt', format_duration_hm),
]


def _format_quality(value: Optional[float]) -> str:
    if value is None:
        return placeholder
    return f"{value:.1f}/5"


def format_summary_for_display(summary: WeeklySummary) -> Dict[str, str]:
    """Format every field of a summary for display."""
    formatted = {field: formatter(getattr(summary, field)) for _, field, _, formatter in SUMMARY_ROWS}
    formatted['avg_quality'] = _format_quality(summary.avg_quality)
    formatted['days_logged'] = f"{summary.days_logged}/{summary.total_days}"
    formatted['se_band'] = efficiency_severity(summary.avg_se).value
    return formatted


def _trend_cell(current: WeeklySummary, other: Optional[WeeklySummary], field: str, measure: str) -> str:
    if other is None:
        return placeholder
    trend = describe_metric_trend(measure, diff(getattr(current, field), getattr(other, field)))
    if trend is None:
        return placeholder
    return f"{trend.arrow.value} {trend.magnitude}"


def _format_change(value: Optional[float]) -> str:
    if value is None:
        return placeholder
    return f"{value:+.1f}%"


def create_markdown_report(report: ProgressReport, title: str = 'Sleep Diary Progress') -> str:
    """Create a markdown summary of a weekly progress report."""
    comparison = report.comparison
    current, previous, baseline = comparison.current, comparison.previous, comparison.baseline
    formatted = {
        'current': format_summary_for_display(current),
        'previous': format_summary_for_display(previous) if previous else {},
        'baseline': format_summary_for_display(baseline) if baseline else {},
    }

    baseline_label = format_date_range(*report.baseline_range) if report.baseline_range else placeholder
    md_content = f"""# {title}

**Generated on:** {datetime.now().strftime('%Y-%m-%d %H:%M')}
**This week:** {format_date_range(*report.current_range)}
**Last week:** {format_date_range(*report.previous_range)}
**Baseline:** {baseline_label}
**Diary completion:** {report.completion_rate}% ({formatted['current']['days_logged']} days)

## Weekly Averages

| Measure | This week | Last week | Baseline | vs last week | vs baseline |
|---|---|---|---|---|---|
"""

    for label, field, measure, _ in SUMMARY_ROWS:
        md_content += (
            f"| {label} | {formatted['current'][field]} "
            f"| {formatted['previous'].get(field, placeholder)} "
            f"| {formatted['baseline'].get(field, placeholder)} "
            f"| {_trend_cell(current, previous, field, measure)} "
            f"| {_trend_cell(current, baseline, field, measure)} |\n"
        )
    md_content += (
        f"| Sleep Quality | {formatted['current']['avg_quality']} "
        f"| {formatted['previous'].get('avg_quality', placeholder)} "
        f"| {formatted['baseline'].get('avg_quality', placeholder)} "
        f"| {_trend_cell(current, previous, 'avg_quality', 'quality_rating')} "
        f"| {_trend_cell(current, baseline, 'avg_quality', 'quality_rating')} |\n"
    )

    md_content += f"""
## Sleep Efficiency Change

- **From last week:** {_format_change(comparison.se_change)}
- **From baseline:** {_format_change(comparison.se_baseline_change)}
"""

    if report.recommendation is not None:
        rec = report.recommendation
        md_content += f"""
## Sleep Window Recommendation

**{action_label(rec.action)}** ({rec.confidence.value} confidence)

{rec.reason}
"""

    return md_content
