import sys
import pathlib
from datetime import date

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

# make the flat `quickadd` package importable without installing it
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quickadd.main import app  # noqa: E402

# 2024-06-12 is a Wednesday; every date expectation in the suite is relative to it.
NOW = date(2024, 6, 12)


@pytest.fixture
def now():
    return NOW


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
