"""Calendar helpers shared by the phrase resolver and the suggestion list.

Weekday indexes count from Sunday (0) to Saturday (6). All functions take
the reference date explicitly; `today_local()` is only called when a caller
omits it, and then only once per public call.
"""
from datetime import date, datetime, timedelta
import logging

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

logger = logging.getLogger(__name__)

DAY_NAMES = ('sunday', 'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday')

MONTH_NAMES = (
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
)

# Ordered (token, weekday index) pairs. The order is part of the contract:
# prefix lookups such as the palette's "t" -> tuesday take the first hit.
DAY_ABBREVIATIONS = (
    ('sun', 0), ('sunday', 0),
    ('mon', 1), ('monday', 1),
    ('tue', 2), ('tues', 2), ('tuesday', 2),
    ('wed', 3), ('wednesday', 3),
    ('thu', 4), ('thur', 4), ('thurs', 4), ('thursday', 4),
    ('fri', 5), ('friday', 5),
    ('sat', 6), ('saturday', 6),
)

# Ordered (token, month number) pairs, month numbers 1-12.
MONTH_ABBREVIATIONS = (
    ('jan', 1), ('january', 1),
    ('feb', 2), ('february', 2),
    ('mar', 3), ('march', 3),
    ('apr', 4), ('april', 4),
    ('may', 5),
    ('jun', 6), ('june', 6),
    ('jul', 7), ('july', 7),
    ('aug', 8), ('august', 8),
    ('sep', 9), ('sept', 9), ('september', 9),
    ('oct', 10), ('october', 10),
    ('nov', 11), ('november', 11),
    ('dec', 12), ('december', 12),
)

# relativedelta weekday anchors indexed by our Sunday-first weekday index
_ANCHORS = (SU, MO, TU, WE, TH, FR, SA)

# Leap years recur at most 8 years apart (e.g. 2096 -> 2104).
_LEAP_SEARCH_YEARS = 9


def today_local() -> date:
    """Return the host's local wall-clock date."""
    return date.today()


def as_date(value) -> date:
    """Truncate a reference moment to a calendar day.

    Accepts a date, a datetime (its date part is used) or None (local today).
    """
    if value is None:
        return today_local()
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday_index(d: date) -> int:
    """Sunday-first weekday index of d."""
    return d.isoweekday() % 7


def lookup_weekday(token: str) -> int | None:
    t = token.lower()
    for name, idx in DAY_ABBREVIATIONS:
        if t == name:
            return idx
    return None


def lookup_month(token: str) -> int | None:
    """Map a month name or abbreviation to 1-12 by its first three letters."""
    t = token.lower()
    for name, month in MONTH_ABBREVIATIONS:
        if t == name or t.startswith(name[:3]):
            return month
    return None


def next_occurrence(weekday: int, weeks_ahead: int = 0, today=None) -> date:
    """Return the next date falling on `weekday`, never `today` itself.

    When today already is that weekday the next occurrence is one week out;
    otherwise it is 1-6 days ahead. `weeks_ahead` whole weeks are added on
    top, so weeks_ahead=1 is "the one after next".
    """
    if not 0 <= weekday <= 6:
        raise ValueError(f"weekday index must be 0-6 (Sunday=0), got {weekday!r}")
    today = as_date(today)
    # start from tomorrow and move forward to the first matching weekday
    nxt = today + relativedelta(days=+1, weekday=_ANCHORS[weekday](+1))
    return nxt + relativedelta(weeks=+weeks_ahead)


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_weeks(d: date, n: int) -> date:
    return d + relativedelta(weeks=+n)


def month_start(d: date, months_ahead: int = 0) -> date:
    """First day of the month `months_ahead` months after d's month."""
    return d.replace(day=1) + relativedelta(months=+months_ahead)


def safe_date(y: int, m: int, d: int) -> date | None:
    try:
        return date(y, m, d)
    except ValueError:
        return None


def resolve_month_day(month: int, day: int, today=None) -> date | None:
    """Resolve a yearless month/day to its next occurrence on or after today.

    Returns None when the combination never exists (31 June, 30 February).
    29 February moves to the next leap year once this year's has passed.
    """
    today = as_date(today)
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    # 2000 was a leap year, so this only rejects impossible combinations
    if safe_date(2000, month, day) is None:
        return None
    for year in range(today.year, today.year + _LEAP_SEARCH_YEARS):
        candidate = safe_date(year, month, day)
        if candidate is not None and candidate >= today:
            return candidate
    logger.debug('no occurrence of %s/%s found after %s', month, day, today)
    return None


def format_short(d: date) -> str:
    """'Jun 17' style description."""
    return f"{MONTH_NAMES[d.month - 1][:3].title()} {d.day}"


def format_with_weekday(d: date) -> str:
    """'Mon, Jun 17' style description."""
    return f"{DAY_NAMES[weekday_index(d)][:3].title()}, {format_short(d)}"


def weekday_label(d: date) -> str:
    """Full capitalised weekday name, e.g. 'Monday'."""
    return DAY_NAMES[weekday_index(d)].title()
