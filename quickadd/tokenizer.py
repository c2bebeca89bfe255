"""Turn one line of quick-add text into structured task fields.

    "Ship report #work @dev d/fri https://x.co tomorrow"

Extraction runs in a fixed order, each stage working on what the previous
stages left behind: link, tags, location, deadline marker, scheduled date.
Links go first because they may contain '#', '@' or 'd/' sequences that the
later stages would otherwise pick apart.
"""
import logging
from typing import Iterable, Optional

from .dates import as_date
from .models import Location, ParsedTaskInput, TaskFields
from .phrases import resolve, strip_date_phrases
from .utils import (
    TRAILING_HASHTAG_RE,
    TRAILING_MENTION_RE,
    collapse_whitespace,
    extract_hashtags,
    extract_mention,
    extract_urls,
    find_deadline_marker,
    remove_deadline_markers,
    remove_hashtags_from_text,
    remove_mentions_from_text,
    remove_urls,
)

logger = logging.getLogger(__name__)


def tokenize(raw_input: str | None, today=None) -> ParsedTaskInput:
    today = as_date(today)
    text = raw_input or ''

    # 1. link: first one wins, all are removed
    urls = extract_urls(text)
    url = urls[0] if urls else None
    text = remove_urls(text)

    # 2. tags
    tags = frozenset(extract_hashtags(text))
    text = remove_hashtags_from_text(text)

    # 3. location
    location = extract_mention(text)
    text = remove_mentions_from_text(text)

    # 4. deadline marker; stripped even when its argument does not resolve
    deadline = None
    marker = find_deadline_marker(text)
    if marker is not None:
        deadline = resolve(marker, today=today).date
        if deadline is None:
            logger.debug('deadline marker d/%s did not resolve to a date', marker)
        text = remove_deadline_markers(text)

    # 5. scheduled date from whatever is left
    res = resolve(text, today=today)
    title = collapse_whitespace(strip_date_phrases(res.title, today=today))

    return ParsedTaskInput(
        clean_title=title,
        tags=tags,
        location_token=location,
        scheduled_date=res.date,
        deadline=deadline,
        url=url,
    )


def typing_tag(text: str | None) -> tuple[bool, str]:
    """Is the user in the middle of typing a '#tag'? Returns (typing, partial)."""
    m = TRAILING_HASHTAG_RE.search(text or '')
    if m is None:
        return False, ''
    return True, m.group(1).lower()


def typing_location(text: str | None) -> tuple[bool, str]:
    m = TRAILING_MENTION_RE.search(text or '')
    if m is None:
        return False, ''
    return True, m.group(1).lower()


def insert_tag(text: str, tag: str) -> str:
    """Replace the trailing partial '#query' with the full tag."""
    return TRAILING_HASHTAG_RE.sub(lambda _m: f"#{tag} ", text, count=1)


def insert_location(text: str, name: str) -> str:
    return TRAILING_MENTION_RE.sub(lambda _m: f"@{name} ", text, count=1)


def filter_names(names: Iterable[str], query: str) -> list[str]:
    q = (query or '').lower()
    return [n for n in names if q in n.lower()]


def _find_by_name(items: Iterable[Location], name: str) -> Optional[Location]:
    for item in items:
        if item.name.lower() == name:
            return item
    return None


def resolve_location(token: str | None,
                     projects: Iterable[Location] = (),
                     areas: Iterable[Location] = ()) -> tuple[Optional[str], Optional[str]]:
    """Map an '@name' token to (project_id, area_id).

    Names compare exactly, ignoring case. A project with the name wins; an
    area is only looked up when no project matched.
    """
    if not token:
        return None, None
    name = token.lower()
    project = _find_by_name(projects, name)
    if project is not None:
        return project.id, None
    area = _find_by_name(areas, name)
    if area is not None:
        return None, area.id
    logger.debug('location @%s matches no project or area', name)
    return None, None


def to_task_fields(parsed: ParsedTaskInput,
                   projects: Iterable[Location] = (),
                   areas: Iterable[Location] = ()) -> TaskFields:
    project_id, area_id = resolve_location(parsed.location_token, projects, areas)
    return TaskFields(
        title=parsed.clean_title,
        project_id=project_id,
        tags=tuple(sorted(parsed.tags)),
        scheduled_date=parsed.scheduled_date,
        deadline=parsed.deadline,
        area_id=area_id,
        url=parsed.url,
    )
