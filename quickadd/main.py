"""HTTP surface for the command palette.

The palette front end calls these endpoints on every keystroke; they are thin
wrappers around the pure parsing and suggestion functions.
"""
import logging
import sys
import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import config
from .dates import today_local
from .models import Location
from .phrases import resolve
from .suggestions import display_label, suggest, suggestions_for_mode
from .tokenizer import to_task_fields, tokenize, typing_location, typing_tag

logger = logging.getLogger(__name__)
# Ensure messages from this module appear on the server console when no
# handlers are configured (safe fallback for development/testing).
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter('%(asctime)s %(levelname)s:%(name)s: %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

app = FastAPI(title='quickadd', debug=config.DEV_MODE)


def _reference_date(today: Optional[datetime.date]) -> datetime.date:
    # sampled once per request and passed down explicitly
    if today is not None:
        return today
    if config.FIXED_TODAY is not None:
        return config.FIXED_TODAY
    return today_local()


class ParseResponse(BaseModel):
    clean_title: str
    tags: List[str]
    location_token: Optional[str] = None
    scheduled_date: Optional[datetime.date] = None
    deadline: Optional[datetime.date] = None
    url: Optional[str] = None


class ResolveDateResponse(BaseModel):
    title: str
    date: Optional[datetime.date] = None
    phrase: Optional[str] = None


class SuggestionOut(BaseModel):
    id: str
    label: str
    display_label: str
    date: Optional[datetime.date] = None
    description: str
    icon: str
    is_someday: bool = False


class LocationIn(BaseModel):
    id: str
    name: str


class TaskFieldsRequest(BaseModel):
    text: str
    today: Optional[datetime.date] = None
    projects: List[LocationIn] = Field(default_factory=list)
    areas: List[LocationIn] = Field(default_factory=list)


class TaskFieldsResponse(BaseModel):
    title: str
    project_id: Optional[str] = None
    tags: List[str]
    scheduled_date: Optional[datetime.date] = None
    deadline: Optional[datetime.date] = None
    area_id: Optional[str] = None
    url: Optional[str] = None


class TypingState(BaseModel):
    typing: bool
    query: str


class AutocompleteResponse(BaseModel):
    tag: TypingState
    location: TypingState


@app.get('/health')
async def health():
    return {'ok': True, 'today': _reference_date(None).isoformat()}


@app.get('/parse', response_model=ParseResponse)
async def api_parse(text: str = '', today: Optional[datetime.date] = None):
    """Split quick-add text into title, tags, location, dates and link."""
    try:
        parsed = tokenize(text, today=_reference_date(today))
    except Exception:
        # return the text untouched rather than failing the keystroke
        logger.exception('api_parse failed for %r', text)
        return ParseResponse(clean_title=text, tags=[])
    return ParseResponse(
        clean_title=parsed.clean_title,
        tags=sorted(parsed.tags),
        location_token=parsed.location_token,
        scheduled_date=parsed.scheduled_date,
        deadline=parsed.deadline,
        url=parsed.url,
    )


@app.get('/resolve_date', response_model=ResolveDateResponse)
async def api_resolve_date(text: str = '', today: Optional[datetime.date] = None):
    try:
        res = resolve(text, today=_reference_date(today))
    except Exception:
        logger.exception('api_resolve_date failed for %r', text)
        return ResolveDateResponse(title=text)
    return ResolveDateResponse(title=res.title, date=res.date, phrase=res.phrase)


@app.get('/suggest', response_model=List[SuggestionOut])
async def api_suggest(q: str = '', mode: Optional[str] = None, today: Optional[datetime.date] = None):
    """Date suggestions for the palette; `mode` filters and relabels them."""
    ref = _reference_date(today)
    if mode is None:
        results = suggest(q, today=ref)
    else:
        try:
            results = suggestions_for_mode(mode, q, today=ref)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return [
        SuggestionOut(
            id=s.id,
            label=s.label,
            display_label=display_label(mode, s) if mode else s.label,
            date=s.date,
            description=s.description,
            icon=s.icon,
            is_someday=s.is_someday,
        )
        for s in results
    ]


@app.post('/task_fields', response_model=TaskFieldsResponse)
async def api_task_fields(payload: TaskFieldsRequest):
    """Parse text and resolve its @location against the caller's projects and areas."""
    parsed = tokenize(payload.text, today=_reference_date(payload.today))
    fields = to_task_fields(
        parsed,
        projects=[Location(id=p.id, name=p.name) for p in payload.projects],
        areas=[Location(id=a.id, name=a.name) for a in payload.areas],
    )
    if parsed.location_token and fields.project_id is None and fields.area_id is None:
        logger.info('task_fields: @%s did not match any project or area', parsed.location_token)
    return TaskFieldsResponse(
        title=fields.title,
        project_id=fields.project_id,
        tags=list(fields.tags),
        scheduled_date=fields.scheduled_date,
        deadline=fields.deadline,
        area_id=fields.area_id,
        url=fields.url,
    )


@app.get('/autocomplete', response_model=AutocompleteResponse)
async def api_autocomplete(text: str = ''):
    tag_typing, tag_query = typing_tag(text)
    loc_typing, loc_query = typing_location(text)
    return AutocompleteResponse(
        tag=TypingState(typing=tag_typing, query=tag_query),
        location=TypingState(typing=loc_typing, query=loc_query),
    )
