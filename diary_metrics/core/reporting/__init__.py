"""
Reporting module for sleep diary progress.

This module contains the display formatters and the markdown report used by
the command line script.
"""

from diary_metrics.core.reporting.report_generator import create_markdown_report, format_summary_for_display

__all__ = ['create_markdown_report', 'format_summary_for_display']
