# diary_metrics/utils/data_validation.py

import logging
import math
import os
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from pydantic import ValidationError

from diary_metrics.core.models.data_models import DiaryEntry

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ('tst', 'tib', 'se', 'sol', 'waso', 'ema', 'twt')
ERROR_HANDLING_MODES = ('raise', 'filter')


class DiaryEntryValidationError(ValueError):
    """Raised when an external record cannot be parsed into a DiaryEntry."""

    def __init__(self, index: Optional[int], message: str, errors: Optional[list] = None):
        self.index = index
        self.errors = errors or []
        location = f"Diary record {index}" if index is not None else "Diary record"
        super().__init__(f"{location}: {message}")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return value is pd.NaT


def _coerce_number(field: str, value: Any, index: Optional[int]):
    """Turn a CSV-style number into a float; anything non-numeric is rejected."""
    if isinstance(value, (bool, np.bool_)):
        raise DiaryEntryValidationError(index, f"'{field}' must be numeric, got a boolean")
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            raise DiaryEntryValidationError(index, f"'{field}' must be a finite number, got {value}")
        return value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            raise DiaryEntryValidationError(index, f"'{field}' must be numeric, got '{value}'")
    else:
        # floats, numpy scalars and similar
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise DiaryEntryValidationError(index, f"'{field}' must be numeric, got {type(value).__name__}")

    # 'inf', 'nan' and overflowing literals such as '1e400' parse as floats
    if not math.isfinite(number):
        raise DiaryEntryValidationError(index, f"'{field}' must be a finite number, got '{value}'")
    return number


def _normalize_record(record: Dict[str, Any], index: Optional[int]) -> Dict[str, Any]:
    normalized = {}
    for key, value in record.items():
        normalized[key] = None if _is_missing(value) else value

    for field in NUMERIC_FIELDS:
        if normalized.get(field) is not None:
            normalized[field] = _coerce_number(field, normalized[field], index)

    rating = normalized.get('quality_rating')
    if rating is not None:
        rating = _coerce_number('quality_rating', rating, index)
        # Nullable integer columns come back from CSV as floats
        if isinstance(rating, float) and rating.is_integer():
            rating = int(rating)
        normalized['quality_rating'] = rating

    return normalized


def parse_diary_entry(record: Dict[str, Any], index: Optional[int] = None) -> DiaryEntry:
    """
    Parse one untyped record (JSON object, CSV row) into a DiaryEntry.

    Raises:
        DiaryEntryValidationError: If a field is missing, non-numeric or out of range
    """
    if not isinstance(record, dict):
        raise DiaryEntryValidationError(index, f"expected a mapping, got {type(record).__name__}")

    normalized = _normalize_record(record, index)
    try:
        return DiaryEntry(**normalized)
    except ValidationError as e:
        fields = ', '.join(sorted({str(err['loc'][0]) for err in e.errors() if err['loc']}))
        raise DiaryEntryValidationError(index, f"invalid fields: {fields}", e.errors()) from e


def parse_diary_entries(records: Iterable[Dict[str, Any]], error_handling: str = 'raise') -> List[DiaryEntry]:
    """
    Parse many records into DiaryEntry objects.

    Args:
        records: Untyped records
        error_handling: 'raise' to fail on the first invalid record, or
            'filter' to log a warning and skip it

    Returns:
        List of DiaryEntry objects
    """
    if error_handling not in ERROR_HANDLING_MODES:
        raise ValueError(f"Invalid error_handling '{error_handling}'. Must be one of: {', '.join(ERROR_HANDLING_MODES)}")

    entries = []
    for i, record in enumerate(records):
        try:
            entries.append(parse_diary_entry(record, i))
        except DiaryEntryValidationError as e:
            if error_handling == 'raise':
                raise
            logger.warning(f"Skipping invalid diary record: {e}")
    return entries


def parse_diary_frame(frame: pd.DataFrame, error_handling: str = 'raise') -> List[DiaryEntry]:
    """Parse the rows of a DataFrame into DiaryEntry objects."""
    return parse_diary_entries(frame.to_dict(orient='records'), error_handling=error_handling)


def load_diary_csv(file_path, error_handling: str = 'raise') -> List[DiaryEntry]:
    """
    Load and validate a CSV export of diary entries.

    Raises:
        FileNotFoundError: If the file doesn't exist
        DiaryEntryValidationError: If a row is invalid and error_handling is 'raise'
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Diary file not found: {file_path}")

    frame = pd.read_csv(file_path, dtype={'id': str})
    logger.info(f"Read {len(frame)} diary rows from {file_path}")
    return parse_diary_frame(frame, error_handling=error_handling)
