"""Shared pytest fixtures for People Profile tests."""
import os

# Settings are read at import time by app.database / app.main.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = ""
os.environ["GCS_BUCKET_NAME"] = ""
os.environ["IMPORT_PROTECTED_EMAILS"] = ""

from io import BytesIO

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, build_engine, get_db
from app.excel.reader import ExcelRow
from app.main import app as fastapi_app
from app.utils import cache


@pytest_asyncio.fixture
async def db_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client for the ASGI app, backed by the per-test database."""

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _no_redis():
    """Every test starts with caching disabled."""
    cache.set_redis(None)
    yield
    cache.set_redis(None)


def _build_workbook(rows: list[dict], headers: list[str] | None = None) -> bytes:
    if headers is None:
        headers = []
        for row in rows:
            for key in row:
                if key not in headers:
                    headers.append(key)
    wb = Workbook()
    ws = wb.active
    ws.title = "Users"
    ws.append(headers)
    for row in rows:
        ws.append([row.get(h) for h in headers])
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    """Build ``.xlsx`` bytes from a list of ``{header: value}`` rows."""
    return _build_workbook


@pytest.fixture
def make_rows():
    """Wrap plain dicts as ``ExcelRow`` objects numbered from sheet row 2."""

    def _make(*rows: dict) -> list[ExcelRow]:
        return [ExcelRow(row_number=i, values=dict(r)) for i, r in enumerate(rows, start=2)]

    return _make


@pytest.fixture
def full_row():
    """A spreadsheet row filling every supported section."""
    return {
        "Email": "  Jane.Smith@Example.com ",
        "Name": "Jane Smith",
        "Team": "Engineering",
        "Birthday": "1990-01-15",
        "Chronotype": "Wolf (Lion)",
        "CoreValue1": "Integrity",
        "CoreValue2": "Curiosity",
        "CoreValue3": "",
        "Strength1": "Creativity",
        "Strength2": "Leadership",
        "BigFive_Neuroticism_Level": "Low",
        "BigFive_Neuroticism_Score": 420,
        "BigFive_Neuroticism_Anxiety_Level": "low",
        "BigFive_Neuroticism_Anxiety_Score": "410",
        "BigFive_OpennessToExperience_Level": "Hgh",
        "BigFive_OpennessToExperience_Imagination_Level": "High",
        "BigFive_OpennessToExperience_Imagination_Score": 880,
        "Goals_Period": "Q1 2025",
        "Goals_Professional": "Ship the importer",
        "Goals_Personal": "",
    }
