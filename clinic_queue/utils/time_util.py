# /clinic_queue/utils/time_util.py
from datetime import date, datetime, timezone


def utcnow():
    """Current UTC time as a naive datetime, matching how the columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_or_none(value):
    return value.isoformat() if value else None


def _plural(count, unit):
    return f"{count} {unit}{'s' if count != 1 else ''}"


def format_wait_time(check_in_time, consultation_start_time=None, now=None):
    """
    Formats how long a patient has waited since check-in.

    The wait runs until the consultation started, or until ``now`` when the
    patient is still in the waiting room. Examples: "1 min", "45 mins",
    "2 hrs 5 mins".
    """
    if not check_in_time:
        return 'Not checked in'

    end = consultation_start_time or now or utcnow()
    wait_minutes = max(int((end - check_in_time).total_seconds() // 60), 0)

    if wait_minutes < 60:
        return _plural(wait_minutes, 'min')

    hours, minutes = divmod(wait_minutes, 60)
    return f"{_plural(hours, 'hr')} {_plural(minutes, 'min')}"


def parse_datetime(value):
    """
    Parses an ISO 8601 date-time string into a naive UTC datetime.

    Offsets are converted to UTC; a trailing 'Z' is accepted.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])
