"""Plain value types passed between the parser, the suggestion list and callers.

Everything here is produced and consumed inside a single call; nothing is
cached or mutated afterwards, so all types are frozen.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

# Icons understood by the palette renderer.
ICONS = ('sun', 'calendar', 'week', 'clear', 'someday')


@dataclass(frozen=True)
class ResolvedDate:
    """Result of running the date phrase resolver over a piece of text."""
    title: str
    date: Optional[date] = None
    # exact text that was matched (None when nothing resolved)
    phrase: Optional[str] = None


@dataclass(frozen=True)
class ParsedTaskInput:
    clean_title: str
    tags: frozenset[str] = frozenset()
    # unresolved '@name' reference; the caller maps it to a project or area
    location_token: Optional[str] = None
    scheduled_date: Optional[date] = None
    deadline: Optional[date] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class DateSuggestion:
    """One selectable row in the date palette.

    date=None with is_someday=True means "defer indefinitely";
    date=None with is_someday=False means "clear the existing date".
    """
    id: str
    label: str
    date: Optional[date]
    description: str
    icon: str
    is_someday: bool = False

    def __post_init__(self):
        if self.icon not in ICONS:
            raise ValueError(f"unknown suggestion icon: {self.icon!r}")


@dataclass(frozen=True)
class Location:
    """A project or area known to the caller."""
    id: str
    name: str


@dataclass(frozen=True)
class TaskFields:
    title: str
    project_id: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    scheduled_date: Optional[date] = None
    deadline: Optional[date] = None
    area_id: Optional[str] = None
    url: Optional[str] = None
