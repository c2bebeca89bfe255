"""Date suggestions for the command palette's schedule and deadline modes.

`suggest` is called on every keystroke with the partial query. It returns a
fresh list each time; ids are stable for a given query and reference date so
the renderer can key rows on them.
"""
import logging
import re
from datetime import date
from typing import Optional

from .dates import (
    DAY_ABBREVIATIONS,
    DAY_NAMES,
    add_days,
    add_weeks,
    as_date,
    format_short,
    format_with_weekday,
    month_start,
    next_occurrence,
    safe_date,
    weekday_label,
)
from .models import DateSuggestion

logger = logging.getLogger(__name__)

SCHEDULE_MODES = ('schedule', 'bulkSchedule')
DEADLINE_MODES = ('deadline', 'bulkDeadline')
PALETTE_MODES = SCHEDULE_MODES + DEADLINE_MODES

# keywords that select each base suggestion, keyed by suggestion id
BASE_KEYWORDS = (
    ('today', ('today',)),
    ('tomorrow', ('tomorrow', 'tom')),
    ('next-week', ('next week', 'next', 'week')),
    ('no-date', ('no date', 'none', 'clear', 'remove')),
    ('someday', ('someday', 'later', 'eventually')),
)

_DAY_NUMBER_RE = re.compile(r"^(\d{1,2})(?:st|nd|rd|th)?$")


def matches_keyword(query: str, keyword: str) -> bool:
    """Prefix or substring match, ignoring case."""
    q = query.lower()
    k = keyword.lower()
    return k.startswith(q) or q in k


def base_suggestions(today: date) -> list[DateSuggestion]:
    tomorrow = add_days(today, 1)
    next_week = add_weeks(today, 1)
    return [
        DateSuggestion('today', 'Today', today, format_with_weekday(today), 'sun'),
        DateSuggestion('tomorrow', 'Tomorrow', tomorrow, format_with_weekday(tomorrow), 'calendar'),
        DateSuggestion('next-week', 'Next Week', next_week, format_with_weekday(next_week), 'week'),
        DateSuggestion('no-date', 'No Date', None, 'Remove scheduled date', 'clear'),
        DateSuggestion('someday', 'Someday', None, 'Do it eventually', 'someday', is_someday=True),
    ]


def _weekday_suggestions(q: str, today: date) -> list[DateSuggestion]:
    # only the first abbreviation that starts with the query counts
    for abbrev, idx in DAY_ABBREVIATIONS:
        if not abbrev.startswith(q):
            continue
        name = DAY_NAMES[idx]
        out = []
        for ordinal in (1, 2):
            d = next_occurrence(idx, ordinal - 1, today=today)
            out.append(DateSuggestion(f"{name}-{ordinal}", name.title(), d, format_short(d), 'calendar'))
        return out
    return []


def _day_number_suggestions(q: str, today: date) -> list[DateSuggestion]:
    m = _DAY_NUMBER_RE.match(q)
    if m is None:
        return []
    day = int(m.group(1))
    if not 1 <= day <= 31:
        return []
    # this month while the day is still ahead of us, otherwise next month
    first = month_start(today, 0 if day > today.day else 1)
    out = []
    for ordinal, months_ahead in ((1, 0), (2, 1)):
        month = month_start(first, months_ahead)
        d = safe_date(month.year, month.month, day)
        if d is None:
            logger.debug('skipping day %s suggestion: %04d-%02d is too short', day, month.year, month.month)
            continue
        out.append(DateSuggestion(f"day-{day}-{ordinal}", weekday_label(d), d, format_short(d), 'calendar'))
    return out


def suggest(query: str | None, today=None) -> list[DateSuggestion]:
    """Rank date suggestions for a partial palette query.

    Empty query: Today, Tomorrow, Next Week, No Date, Someday. Otherwise the
    base entries whose keywords match, then two upcoming occurrences of the
    matching weekday, then the next two months' occurrences of a day number.
    """
    today = as_date(today)
    q = (query or '').strip().lower()
    base = base_suggestions(today)
    if not q:
        return base

    by_id = {s.id: s for s in base}
    results: list[DateSuggestion] = []
    for sid, keywords in BASE_KEYWORDS:
        if any(matches_keyword(q, k) for k in keywords):
            results.append(by_id[sid])

    # id namespaces of the three rules never overlap
    return results + _weekday_suggestions(q, today) + _day_number_suggestions(q, today)


def suggestions_for_mode(mode: str, query: str | None, today=None) -> list[DateSuggestion]:
    """Suggestions as shown by one palette mode; deadlines can't be 'someday'."""
    if mode not in PALETTE_MODES:
        raise ValueError(f"unknown palette mode: {mode!r}")
    results = suggest(query, today=today)
    if mode in DEADLINE_MODES:
        results = [s for s in results if not s.is_someday]
    return results


def display_label(mode: str, suggestion: DateSuggestion) -> str:
    if mode in DEADLINE_MODES:
        if suggestion.icon == 'clear':
            return 'No Deadline'
        return f"Due {suggestion.label}"
    return suggestion.label


def selection_update(mode: str, suggestion: DateSuggestion) -> dict[str, Optional[object]]:
    """Field changes to apply to a task when a suggestion is picked."""
    if mode in DEADLINE_MODES:
        if suggestion.is_someday:
            raise ValueError('someday is not a valid deadline')
        return {'deadline': suggestion.date}
    if mode not in SCHEDULE_MODES:
        raise ValueError(f"unknown palette mode: {mode!r}")
    if suggestion.is_someday:
        return {'someday': True, 'scheduled_date': None}
    if suggestion.date is None:
        return {'scheduled_date': None}
    return {'scheduled_date': suggestion.date, 'someday': False}
