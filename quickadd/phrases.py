"""Resolve the date phrases people type into the quick-add box.

Patterns are tried in a fixed priority order and the first one whose match
resolves to a real date wins:

    1. next week            -> one week from today
    2. next <weekday>       -> the occurrence after the nearest one
    3. <day> <month>        -> "21 jun", "21st june", "21jun"
    4. <month> <day>        -> "jun 21", "june 21st", "jun21"
    5. <weekday>            -> the nearest occurrence (never today)
    6. today | tod
    7. tomorrow | tom | tmr | tmrw

Month/day phrases never resolve into the past: a day that already went by
this year rolls over to next year. A phrase whose month/day does not exist
("31 jun") is ignored and the lower priority patterns get their turn.
"""
import logging
import re
from datetime import date
from typing import Callable, Optional

from .dates import (
    add_days,
    add_weeks,
    as_date,
    lookup_month,
    lookup_weekday,
    next_occurrence,
    resolve_month_day,
)
from .models import ResolvedDate
from .utils import collapse_whitespace

logger = logging.getLogger(__name__)

WEEKDAY_PATTERN = (
    r"sun(?:day)?|mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?"
    r"|thu(?:r(?:s(?:day)?)?)?|fri(?:day)?|sat(?:urday)?"
)
MONTH_PATTERN = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_ORDINAL = r"(?:st|nd|rd|th)?"


def _next_week(m: re.Match, today: date) -> Optional[date]:
    return add_weeks(today, 1)


def _next_weekday(m: re.Match, today: date) -> Optional[date]:
    idx = lookup_weekday(m.group(1))
    if idx is None:
        return None
    return next_occurrence(idx, 1, today=today)


def _day_month(m: re.Match, today: date) -> Optional[date]:
    month = lookup_month(m.group(2))
    if month is None:
        return None
    return resolve_month_day(month, int(m.group(1)), today=today)


def _month_day(m: re.Match, today: date) -> Optional[date]:
    month = lookup_month(m.group(1))
    if month is None:
        return None
    return resolve_month_day(month, int(m.group(2)), today=today)


def _weekday(m: re.Match, today: date) -> Optional[date]:
    idx = lookup_weekday(m.group(1))
    if idx is None:
        return None
    return next_occurrence(idx, 0, today=today)


def _today(m: re.Match, today: date) -> Optional[date]:
    return today


def _tomorrow(m: re.Match, today: date) -> Optional[date]:
    return add_days(today, 1)


# (name, pattern, resolver) in priority order; only the first match of each
# pattern is considered.
PHRASE_MATCHERS: tuple[tuple[str, re.Pattern, Callable[[re.Match, date], Optional[date]]], ...] = (
    ('next_week', re.compile(r"\bnext\s+week\b", re.I), _next_week),
    ('next_weekday', re.compile(rf"\bnext\s+({WEEKDAY_PATTERN})\b", re.I), _next_weekday),
    ('day_month', re.compile(rf"\b(\d{{1,2}}){_ORDINAL}\s*({MONTH_PATTERN})\b", re.I), _day_month),
    ('month_day', re.compile(rf"\b({MONTH_PATTERN})\s*(\d{{1,2}}){_ORDINAL}\b", re.I), _month_day),
    ('weekday', re.compile(rf"\b({WEEKDAY_PATTERN})\b", re.I), _weekday),
    ('today', re.compile(r"\b(today|tod)\b", re.I), _today),
    ('tomorrow', re.compile(r"\b(tomorrow|tom|tmr|tmrw)\b", re.I), _tomorrow),
)


def remove_phrase(text: str, phrase: str) -> str:
    """Remove every whole-word, case-insensitive occurrence of phrase."""
    pattern = re.compile(r"\b" + re.escape(phrase) + r"\b", re.I)
    return collapse_whitespace(pattern.sub(' ', text))


def resolve(text: str | None, today=None) -> ResolvedDate:
    """Find the highest priority date phrase in text.

    Returns the text with the matched phrase removed, the resolved date and
    the phrase itself. When nothing resolves the text comes back unchanged
    with date and phrase set to None.
    """
    text = text or ''
    today = as_date(today)
    for name, regex, resolver in PHRASE_MATCHERS:
        m = regex.search(text)
        if not m:
            continue
        resolved = resolver(m, today)
        if resolved is None:
            logger.debug('date phrase %r matched %s but did not resolve; trying lower priority patterns', m.group(0), name)
            continue
        phrase = m.group(0)
        return ResolvedDate(title=remove_phrase(text, phrase), date=resolved, phrase=phrase)
    return ResolvedDate(title=text, date=None, phrase=None)


def strip_date_phrases(text: str | None, today=None) -> str:
    """Remove every phrase from text that `resolve` would turn into a date.

    The result is a fixed point: resolving it again finds nothing.
    """
    today = as_date(today)
    current = text or ''
    while True:
        res = resolve(current, today=today)
        if res.date is None:
            return current
        logger.debug('stripping extra date phrase %r', res.phrase)
        current = res.title
