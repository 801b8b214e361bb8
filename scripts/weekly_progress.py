#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Script to summarize a patient's sleep diary export and print weekly progress.

Usage:
    python scripts/weekly_progress.py --diary-file data/diary_entries.csv [--as-of 2026-01-14]
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from diary_metrics.config.config_manager import ConfigManager
from diary_metrics.core.reporting.report_generator import create_markdown_report
from diary_metrics.core.services.progress_service import ProgressService
from diary_metrics.utils.data_validation import DiaryEntryValidationError, load_diary_csv
from diary_metrics.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Generate a weekly sleep diary progress report')

    parser.add_argument(
        '--diary-file',
        type=str,
        required=True,
        help='CSV file of diary entries (id, date, tst, tib, se, sol, waso, ema, twt, quality_rating, ...)'
    )

    parser.add_argument(
        '--as-of',
        type=lambda s: datetime.strptime(s, '%Y-%m-%d').date(),
        default=date.today(),
        help='Last day of the current week, YYYY-MM-DD (default: today)'
    )

    parser.add_argument(
        '--window-minutes',
        type=int,
        default=None,
        help='Currently prescribed sleep window in minutes'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to a metrics configuration file'
    )

    parser.add_argument(
        '--skip-invalid',
        action='store_true',
        help='Skip invalid diary rows instead of stopping'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Write the markdown report to this file instead of stdout'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the script."""
    args = parse_args(argv)
    config = ConfigManager(args.config)
    setup_logging(config)

    try:
        entries = load_diary_csv(args.diary_file, error_handling='filter' if args.skip_invalid else 'raise')
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except DiaryEntryValidationError as e:
        logger.error(f"Invalid diary data: {e}")
        return 1

    logger.info(f"Loaded {len(entries)} diary entries")
    report = ProgressService(config).build_comparison(entries, args.as_of, args.window_minutes)
    md_content = create_markdown_report(report)

    if args.output:
        Path(args.output).write_text(md_content)
        logger.info(f"Report saved to {args.output}")
    else:
        print(md_content)

    return 0


if __name__ == '__main__':
    sys.exit(main())
