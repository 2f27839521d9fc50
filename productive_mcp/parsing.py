"""Duration and date parsing for time entries."""
import logging
import re
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import MalformedDate, MalformedDuration

logger = logging.getLogger(__name__)

_HOURS_RE = re.compile(r"^(\d*\.?\d+)\s*h(?:ours?)?$")
_MINUTES_RE = re.compile(r"^(\d+)\s*m(?:inutes?)?$")
_BARE_RE = re.compile(r"^(\d*\.?\d+)$")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _hours_to_minutes(number: str) -> int:
    # Decimal avoids float drift and round()'s half-to-even behaviour
    minutes = Decimal(number) * 60
    return int(minutes.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_duration(value: str) -> int:
    """Parse a duration such as ``2h``, ``2.5 hours``, ``120m`` or ``1.5``.

    A bare number is read as hours. Returns whole minutes.
    """
    v = (value or "").lower().strip()

    try:
        match = _HOURS_RE.match(v)
        if match:
            return _hours_to_minutes(match.group(1))

        match = _MINUTES_RE.match(v)
        if match:
            return int(match.group(1))

        match = _BARE_RE.match(v)
        if match:
            return _hours_to_minutes(match.group(1))
    except (InvalidOperation, ValueError) as e:
        # too many digits for the Decimal context or for int()
        raise MalformedDuration(f'Invalid time format: "{value}". Duration is too large') from e

    raise MalformedDuration(
        f'Invalid time format: "{value}". Use formats like "2h", "120m", or "2.5"'
    )


def format_duration(minutes: int) -> str:
    """Render minutes as ``1h 30m``, ``2h``, ``45m`` or ``0m``."""
    hours, mins = divmod(int(minutes), 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if mins > 0:
        parts.append(f"{mins}m")
    return " ".join(parts) or "0m"


def parse_date(value: str, today: date) -> str:
    """Normalize ``today``, ``yesterday`` or ``YYYY-MM-DD`` to ``YYYY-MM-DD``.

    Month and day are range-checked only (day 1-31 for every month).
    """
    v = (value or "").lower().strip()
    if v == "today":
        return today.isoformat()
    if v == "yesterday":
        return (today - timedelta(days=1)).isoformat()

    match = _ISO_DATE_RE.match(v)
    if match:
        month, day = int(match.group(2)), int(match.group(3))
        if not (1 <= month <= 12 and 1 <= day <= 31):
            raise MalformedDate(f'Invalid date: "{value}"')
        logger.debug("Parsed date %r as %s", value, v)
        return v

    raise MalformedDate(
        f'Invalid date format: "{value}". Use "today", "yesterday", or YYYY-MM-DD format'
    )
