"""Eligibility and statistics calculations for intern activity logs.

Everything here is a pure function of its arguments: no database access,
no clock reads. Callers pass "now" explicitly so results are reproducible.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class EligibilityPolicy:
    """Certificate thresholds for the internship programme."""
    min_active_days: int = 60
    min_average_hours: float = 2.5
    max_gap_days: int = 3


DEFAULT_POLICY = EligibilityPolicy()


@dataclass(frozen=True)
class Statistics:
    total_active_days: int = 0
    average_hours: float = 0.0
    current_streak: int = 0
    total_submissions: int = 0

    def to_dict(self):
        return {
            'totalActiveDays': self.total_active_days,
            'averageHours': self.average_hours,
            'currentStreak': self.current_streak,
            'totalSubmissions': self.total_submissions,
        }


@dataclass(frozen=True)
class EligibilityResult:
    is_eligible: bool = False
    active_days: int = 0
    average_hours: float = 0.0
    max_gap_days: int = 0
    reasons: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self):
        return {
            'isEligible': self.is_eligible,
            'activeDays': self.active_days,
            'averageHours': self.average_hours,
            'maxGapDays': self.max_gap_days,
            'reasons': list(self.reasons),
        }


def _field(record: Any, name: str):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _day_key(record: Any) -> str:
    """Return the record's calendar day as a YYYY-MM-DD string."""
    value = _field(record, 'date')
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return '' if value is None else str(value)


def _parse_day(key: str) -> Optional[date]:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def _coerce_hours(value: Any) -> float:
    """Numeric hours, or 0 for missing, non-numeric and NaN values."""
    if isinstance(value, bool):
        return float(value)
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(hours):
        return 0.0
    return hours


def _hour_totals(activities: Sequence[Any]) -> Tuple[int, float]:
    active_days = len({_day_key(a) for a in activities})
    total_hours = sum(_coerce_hours(_field(a, 'hours')) for a in activities)
    average_hours = total_hours / active_days if active_days > 0 else 0.0
    return active_days, average_hours


def _current_streak(day_keys: Iterable[str], today: date) -> int:
    newest_first = sorted(set(day_keys), reverse=True)
    if not newest_first:
        return 0

    yesterday = today - timedelta(days=1)
    if newest_first[0] not in (today.isoformat(), yesterday.isoformat()):
        return 0

    streak = 1
    for later, earlier in zip(newest_first, newest_first[1:]):
        later_day, earlier_day = _parse_day(later), _parse_day(earlier)
        if later_day is None or earlier_day is None:
            break
        if (later_day - earlier_day).days != 1:
            break
        streak += 1
    return streak


def calculate_stats(activities: Sequence[Any], reference_now) -> Statistics:
    """Summarise an intern's activity log as of ``reference_now``.

    Args:
        activities: records exposing ``date`` and ``hours`` (attributes or
            mapping keys). Order does not matter and same-day duplicates are
            allowed: they collapse for day counting but their hours still add up.
        reference_now: ``datetime`` or ``date`` that defines "today".

    Returns:
        Statistics: zero-valued for an empty log.
    """
    activities = list(activities)
    if not activities:
        return Statistics()

    active_days, average_hours = _hour_totals(activities)

    today = reference_now.date() if isinstance(reference_now, datetime) else reference_now
    streak = _current_streak((_day_key(a) for a in activities), today)

    return Statistics(
        total_active_days=active_days,
        average_hours=average_hours,
        current_streak=streak,
        total_submissions=len(activities),
    )


def _max_gap(day_keys: List[str]) -> int:
    # Adjacent duplicates yield -1, which never beats the initial 0.
    max_gap = 0
    for previous, current in zip(day_keys, day_keys[1:]):
        previous_day, current_day = _parse_day(previous), _parse_day(current)
        if previous_day is None or current_day is None:
            continue
        gap = (current_day - previous_day).days - 1
        if gap > max_gap:
            max_gap = gap
    return max_gap


def calculate_eligibility(activities: Sequence[Any], joining_date=None,
                          policy: Optional[EligibilityPolicy] = None) -> EligibilityResult:
    """Check an activity log against the certificate policy.

    ``joining_date`` is accepted for interface compatibility but does not
    take part in the calculation: gaps are measured between logged days only,
    starting from the first logged activity.
    """
    policy = policy or DEFAULT_POLICY
    activities = list(activities)

    # Not deduplicated: same-day records stay adjacent in the sorted list
    day_keys = sorted(_day_key(a) for a in activities)
    active_days, average_hours = _hour_totals(activities)
    max_gap = _max_gap(day_keys)

    reasons = []
    if active_days < policy.min_active_days:
        reasons.append(
            f"Requires {policy.min_active_days} active days (Current: {active_days})"
        )
    if average_hours < policy.min_average_hours:
        reasons.append(
            f"Average hours must be ≥ {policy.min_average_hours} "
            f"(Current: {average_hours:.1f})"
        )
    if max_gap > policy.max_gap_days:
        reasons.append(
            f"Maximum gap exceeded {policy.max_gap_days} consecutive days "
            f"(Worst gap: {max_gap} days)"
        )

    return EligibilityResult(
        is_eligible=not reasons and active_days > 0,
        active_days=active_days,
        average_hours=average_hours,
        max_gap_days=max_gap,
        reasons=tuple(reasons),
    )


def _quote(value):
    text = '' if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def format_csv(rows: Sequence[dict]) -> str:
    """Render dict rows as CSV text with every value double-quoted."""
    if not rows:
        return ''
    headers = ','.join(rows[0].keys())
    lines = [','.join(_quote(value) for value in row.values()) for row in rows]
    return headers + '\n' + '\n'.join(lines)
