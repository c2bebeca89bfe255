import re

# http/https links; everything up to the next whitespace belongs to the link
URL_RE = re.compile(r"https?://\S+", re.I)
HASHTAG_RE = re.compile(r"#(\w+)")
MENTION_RE = re.compile(r"@(\w+)")
# deadline marker, e.g. 'd/fri', 'd/tom', 'd/23jun'
DEADLINE_RE = re.compile(r"\bd/(\S+)", re.I)

# partial tokens at the very end of the input (autocomplete)
TRAILING_HASHTAG_RE = re.compile(r"#(\w*)$")
TRAILING_MENTION_RE = re.compile(r"@(\w*)$")


def collapse_whitespace(text: str | None) -> str:
    """Collapse all whitespace runs to a single space and trim."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def _remove(pattern: re.Pattern, text: str | None) -> str:
    # keep a space where the token was so neighbouring words don't join
    if not text:
        return ""
    return collapse_whitespace(pattern.sub(" ", text))


def extract_urls(text: str | None) -> list[str]:
    if not text:
        return []
    return URL_RE.findall(text)


def remove_urls(text: str | None) -> str:
    return _remove(URL_RE, text)


def extract_hashtags(text: str | None) -> list[str]:
    """Extract '#word' tags from text as lowercased names without the '#'.

    Duplicates are dropped; first-seen order is kept.
    """
    if not text:
        return []
    seen: set[str] = set()
    out: list[str] = []
    for m in HASHTAG_RE.finditer(text):
        tag = m.group(1).lower()
        if tag not in seen:
            seen.add(tag)
            out.append(tag)
    return out


def remove_hashtags_from_text(text: str | None) -> str:
    """Remove hashtag tokens (e.g. #work) from text and normalize spaces.

    If input is None, return empty string.
    """
    return _remove(HASHTAG_RE, text)


def extract_mention(text: str | None) -> str | None:
    """Return the first '@name' reference in text, lowercased, or None."""
    if not text:
        return None
    m = MENTION_RE.search(text)
    return m.group(1).lower() if m else None


def remove_mentions_from_text(text: str | None) -> str:
    return _remove(MENTION_RE, text)


def find_deadline_marker(text: str | None) -> str | None:
    """Return the argument of the first 'd/<token>' marker, or None."""
    if not text:
        return None
    m = DEADLINE_RE.search(text)
    return m.group(1) if m else None


def remove_deadline_markers(text: str | None) -> str:
    return _remove(DEADLINE_RE, text)
