"""Tests for engine and settings helpers."""

import pytest
from sqlalchemy import String, text

from hilltop.config import DevSettings, Settings, TestSettings, get_settings
from hilltop.database.database import Base, normalize_database_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("sqlite:///./catalog.sqlite", "sqlite+aiosqlite:///./catalog.sqlite"),
        ("postgres://u:p@db/catalog", "postgresql+asyncpg://u:p@db/catalog"),
        ("postgresql://u:p@db/catalog", "postgresql+asyncpg://u:p@db/catalog"),
        ("postgresql+asyncpg://u:p@db/catalog", "postgresql+asyncpg://u:p@db/catalog"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_settings_selected_by_env(monkeypatch):
    get_settings.cache_clear()
    try:
        monkeypatch.setenv("ENV", "production")
        assert type(get_settings()) is Settings
        get_settings.cache_clear()

        monkeypatch.setenv("ENV", "dev")
        assert isinstance(get_settings(), DevSettings)
    finally:
        get_settings.cache_clear()
        monkeypatch.setenv("ENV", "test")
        assert isinstance(get_settings(), TestSettings)


@pytest.mark.asyncio
async def test_sqlite_foreign_keys_enabled(engine):
    async with engine.connect() as conn:
        assert await conn.scalar(text("PRAGMA foreign_keys")) == 1


@pytest.mark.asyncio
async def test_text_columns_are_unbounded(engine):
    bounded = [
        f"{table.name}.{column.name}"
        for table in Base.metadata.tables.values()
        for column in table.columns
        if isinstance(column.type, String) and column.type.length is not None
    ]
    assert bounded == []
