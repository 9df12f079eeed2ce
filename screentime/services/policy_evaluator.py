"""Screen-time policy evaluator.

Pure functions classifying a child's screen time for one moment:

1. Policy disabled  -> within-limits
2. Inside bedtime   -> bedtime
3. Limit used up    -> limit-exceeded
4. >= 80 % used     -> approaching-limit
5. Otherwise        -> within-limits

The evaluation moment is always passed in; nothing here reads a clock,
touches the database or applies setting defaults.
"""

import re
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from screentime.schemas.screen_time import (
    PolicyEvaluation,
    ScreenTimeSettings,
    ScreenTimeStatus,
    UsageData,
    WeeklyUsageEntry,
)

APPROACHING_LIMIT_FRACTION = 0.8
DAYS_PER_WEEK = 7

# Monday = 0, Sunday = 6
DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")


class InvalidInput(ValueError):
    """Raised when settings or usage cannot be evaluated."""


def parse_time(value: str) -> int:
    """Parse a 24-hour ``"HH:MM"`` string into minutes since midnight.

    Raises:
        InvalidInput: If the string is not zero-padded ``HH:MM`` with
            hours 0-23 and minutes 0-59.
    """
    match = _TIME_RE.match(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidInput(f"Invalid time {value!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidInput(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def minutes_since_midnight(now: datetime) -> int:
    return now.hour * 60 + now.minute


def is_weekend(now: datetime) -> bool:
    return now.weekday() >= 5


def is_bedtime(bedtime_start: str, bedtime_end: str, now: datetime) -> bool:
    """Check whether ``now`` falls inside the bedtime window.

    Both ends are inclusive. A start later than the end wraps past
    midnight (e.g. 21:00-07:00). Equal start and end means no bedtime.
    """
    start = parse_time(bedtime_start)
    end = parse_time(bedtime_end)
    t = minutes_since_midnight(now)

    if start == end:
        return False
    if start < end:
        return start <= t <= end
    return t >= start or t <= end


def effective_daily_limit(settings: ScreenTimeSettings, now: datetime) -> int:
    """Daily limit plus the weekend extension on Saturday and Sunday."""
    if is_weekend(now):
        return settings.daily_limit + settings.weekend_extension
    return settings.daily_limit


def _validate(settings: ScreenTimeSettings, usage: UsageData) -> None:
    parse_time(settings.bedtime_start)
    parse_time(settings.bedtime_end)

    for name, value in (
        ("daily_limit", settings.daily_limit),
        ("weekend_extension", settings.weekend_extension),
        ("total_minutes", usage.total_minutes),
    ):
        if value < 0:
            raise InvalidInput(f"{name} must not be negative (got {value})")


def _classify(
    settings: ScreenTimeSettings,
    used: int,
    limit: int,
    now: datetime,
) -> ScreenTimeStatus:
    if not settings.enabled:
        return ScreenTimeStatus.WITHIN_LIMITS
    if is_bedtime(settings.bedtime_start, settings.bedtime_end, now):
        return ScreenTimeStatus.BEDTIME
    # A zero limit leaves no free time, even before any usage
    if used >= limit:
        return ScreenTimeStatus.LIMIT_EXCEEDED
    if used >= APPROACHING_LIMIT_FRACTION * limit:
        return ScreenTimeStatus.APPROACHING_LIMIT
    return ScreenTimeStatus.WITHIN_LIMITS


def evaluate(
    settings: ScreenTimeSettings,
    usage: UsageData,
    now: datetime,
) -> PolicyEvaluation:
    """Classify a child's screen time at ``now``.

    Args:
        settings: Fully populated settings (defaults already merged).
        usage: Usage for the calendar day of ``now``; callers substitute a
            zero record when nothing was recorded.
        now: Evaluation moment. Its wall-clock time and weekday are used
            as-is, so pass it in the family's timezone.

    Returns:
        A ``PolicyEvaluation`` with the status and the derived numbers.

    Raises:
        InvalidInput: On malformed bedtime strings or negative limits/usage.
    """
    _validate(settings, usage)

    limit = effective_daily_limit(settings, now)
    used = usage.total_minutes

    if limit > 0:
        fraction = min(1.0, max(0.0, used / limit))
    else:
        fraction = 0.0

    return PolicyEvaluation(
        status=_classify(settings, used, limit, now),
        effective_daily_limit=limit,
        used_minutes=used,
        remaining_minutes=max(0, limit - used),
        used_fraction=fraction,
    )


def summarize_week(
    daily_usages: Sequence[UsageData | None],
    end_date: date,
) -> list[WeeklyUsageEntry]:
    """Project seven daily usage records onto chart entries.

    ``daily_usages`` runs oldest to newest and its last entry belongs to
    ``end_date``. Days without a record (``None``) count as 0 minutes.
    """
    if len(daily_usages) != DAYS_PER_WEEK:
        raise InvalidInput(
            f"Expected {DAYS_PER_WEEK} daily usage records, got {len(daily_usages)}"
        )

    start = end_date - timedelta(days=DAYS_PER_WEEK - 1)
    entries: list[WeeklyUsageEntry] = []
    for offset, usage in enumerate(daily_usages):
        day = start + timedelta(days=offset)
        entries.append(
            WeeklyUsageEntry(
                date=day,
                day_label=DAY_LABELS[day.weekday()],
                minutes_used=usage.total_minutes if usage is not None else 0,
            )
        )
    return entries


def format_minutes(minutes: int) -> str:
    """Format minutes for display: ``"2h 5m"`` or ``"45m"``."""
    hours, mins = divmod(max(0, minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
