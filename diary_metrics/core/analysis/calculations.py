"""
Module for deriving a night's sleep measures from the diary's clock times.

A patient reports when they went to bed (TTB), tried to sleep (TTS), woke for
the last time (TFA) and got out of bed (TOB), plus how long they lay awake
before sleeping (SOL), during the night (WASO) and before the final wake
(EMA). Everything the aggregator averages follows from those:

    TWT = SOL + WASO + EMA
    TIB = (TFA - TTS) + EMA
    TST = max(0, TIB - TWT)
    SE  = TST / TIB * 100
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from diary_metrics.core.analysis.numeric import round_to_int
from diary_metrics.core.models.data_models import DerivedMeasures, DiaryEntry

logger = logging.getLogger(__name__)

MAX_TIME_IN_BED_MINUTES = 24 * 60


def _minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def resolve_clock_time(sleep_date: date, clock: str) -> datetime:
    """
    Place an "HH:MM" answer on the night that starts on ``sleep_date``.

    Times before noon belong to the following morning.
    """
    parsed = datetime.strptime(clock, '%H:%M').time()
    day = sleep_date + timedelta(days=1) if parsed.hour < 12 else sleep_date
    return datetime.combine(day, time(parsed.hour, parsed.minute))


def resolve_night_times(sleep_date: date, ttb: str, tts: str, tfa: str, tob: str) -> Tuple[datetime, ...]:
    """Resolve the four "HH:MM" answers of one night into datetimes."""
    return tuple(resolve_clock_time(sleep_date, clock) for clock in (ttb, tts, tfa, tob))


def calculate_sleep_metrics(tts: datetime,
                            tfa: datetime,
                            sol: Optional[float] = None,
                            waso: Optional[float] = None,
                            ema: Optional[float] = None) -> DerivedMeasures:
    """
    Calculate TIB, TWT, TST and SE for one night.

    Args:
        tts: Time the patient tried to sleep
        tfa: Time of final awakening
        sol, waso, ema: Wake durations in minutes; None counts as 0

    Returns:
        DerivedMeasures: TIB and TST rounded to whole minutes, SE to a whole
        percentage (0 when there was no time in bed)
    """
    sol, waso, ema = (value or 0 for value in (sol, waso, ema))
    twt = sol + waso + ema
    tib = max(0.0, _minutes_between(tts, tfa) + ema)
    tst = max(0.0, tib - twt)
    se = round_to_int(tst / tib * 100) if tib > 0 else 0

    return DerivedMeasures(tib=round_to_int(tib), twt=twt, tst=round_to_int(tst), se=se)


def with_derived_measures(entry: DiaryEntry, overwrite: bool = False) -> DiaryEntry:
    """
    Fill in an entry's TIB, TWT, TST and SE from its clock times.

    Entries without both TTS and TFA, or whose final awakening is not after
    the sleep attempt, are returned unchanged. Recorded values are kept
    unless ``overwrite`` is set.
    """
    if entry.tts is None or entry.tfa is None or entry.tfa <= entry.tts:
        return entry

    derived = calculate_sleep_metrics(entry.tts, entry.tfa, entry.sol, entry.waso, entry.ema)
    updates = {
        field: float(getattr(derived, field))
        for field in ('tib', 'twt', 'tst', 'se')
        if overwrite or getattr(entry, field) is None
    }
    if not updates:
        return entry
    logger.debug(f"Derived {', '.join(sorted(updates))} for diary entry {entry.id}")
    return DiaryEntry(**{**entry.model_dump(), **updates})


def validate_time_order(ttb: datetime, tts: datetime, tfa: datetime, tob: datetime) -> List[str]:
    """
    Check that a night's clock times happen in order.

    Returns:
        list: Error messages; empty when the times are consistent
    """
    errors = []

    if tts < ttb:
        errors.append('Sleep attempt time cannot be before bed time')
    if tfa <= tts:
        errors.append('Wake time must be after sleep time')
    if tob < tfa:
        errors.append('Out of bed time cannot be before wake time')

    time_in_bed = _minutes_between(ttb, tob)
    if time_in_bed > MAX_TIME_IN_BED_MINUTES:
        errors.append('Time in bed cannot exceed 24 hours')
    if time_in_bed < 0:
        errors.append('Invalid time sequence')

    return errors


def validate_entry_times(entry: DiaryEntry) -> List[str]:
    """Time order errors for an entry; entries missing a clock time are not checked."""
    times = (entry.ttb, entry.tts, entry.tfa, entry.tob)
    if any(t is None for t in times):
        return []
    return validate_time_order(*times)


def validate_out_of_bed_times(sol: Optional[float] = None, sol_out_of_bed: Optional[float] = None,
                              waso: Optional[float] = None, waso_out_of_bed: Optional[float] = None,
                              ema: Optional[float] = None, ema_out_of_bed: Optional[float] = None) -> List[str]:
    """Check that time spent out of bed never exceeds the wake period it belongs to."""
    errors = []
    checks = [
        (sol, sol_out_of_bed, 'Out of bed time cannot exceed total time to fall asleep'),
        (waso, waso_out_of_bed, 'Out of bed time cannot exceed total wake time during night'),
        (ema, ema_out_of_bed, 'Out of bed time cannot exceed total early wake time'),
    ]
    for total, out_of_bed, message in checks:
        if total and out_of_bed and out_of_bed > total:
            errors.append(message)
    return errors
