"""Simple runtime configuration for the quick-add engine.

Control flags are read from environment variables to allow toggling in
development or production without code changes.
"""
import logging
import os
from datetime import date

logger = logging.getLogger(__name__)


def _trueish(v: str | None) -> bool:
    if not v:
        return False
    return v.lower() in ('1', 'true', 'yes', 'on')


def _iso_date(v: str | None) -> date | None:
    if not v:
        return None
    try:
        return date.fromisoformat(v.strip())
    except ValueError:
        logger.warning('ignoring invalid QUICKADD_TODAY value %r (expected YYYY-MM-DD)', v)
        return None


# When true, the app is considered to be running in development mode.
# Use DEV_MODE=1 in the environment (set by dev launch scripts).
DEV_MODE = _trueish(os.getenv('DEV_MODE', '0'))

# Level applied to the HTTP app's logger. Accept lowercase variants.
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Pin the reference date ("now") used by the HTTP endpoints when a request
# does not pass one, e.g. QUICKADD_TODAY=2024-06-12. Library calls are not
# affected; they take an explicit `today` argument.
FIXED_TODAY = _iso_date(os.getenv('QUICKADD_TODAY'))


# Optional local overrides: define variables in quickadd/local_config.py to
# extend or override the defaults above without changing versioned config.
try:
    from .local_config import *  # type: ignore  # noqa: F401,F403
except ImportError:
    # No local overrides present; proceed with defaults.
    pass
