import json
import logging

import pytest
from sqlalchemy import inspect

from casadf.config import Settings
from casadf.domain.errors import NotFoundError, UniqueConstraintViolation
from casadf.infrastructure.database import normalize_database_url
from casadf.infrastructure.logging_config import JSONFormatter, setup_logging


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://casadf:secret@db:5432/casadf")
    monkeypatch.setenv("LOG_JSON", "false")

    settings = Settings(_env_file=None)

    assert settings.is_production
    assert not settings.is_sqlite
    assert settings.log_json is False


def test_settings_defaults(monkeypatch):
    for var in ("ENVIRONMENT", "DATABASE_URL", "DB_POOL_SIZE"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)

    assert settings.is_development
    assert settings.is_sqlite
    assert settings.db_pool_size == 10


@pytest.mark.parametrize("url,expected", [
    ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
    ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
    ("sqlite:///./casadf.db", "sqlite+aiosqlite:///./casadf.db"),
    ("postgresql+asyncpg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
])
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


@pytest.mark.asyncio
async def test_init_db_creates_all_tables(engine):
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        indexes = await conn.run_sync(
            lambda sync_conn: {ix["name"] for ix in inspect(sync_conn).get_indexes("financial_transactions")}
        )

    assert set(tables) == {
        "users", "properties", "leads", "lead_insights", "contracts",
        "financial_transactions", "blog_posts", "webhook_logs",
    }
    assert "financial_transactions_due_date_idx" in indexes


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("casadf.test", logging.WARNING, __file__, 10, "Lead %s bloqueado", (7,), None)
    record.lead_id = 7

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Lead 7 bloqueado"
    assert payload["level"] == "WARNING"
    assert payload["lead_id"] == 7


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(level="debug", json_format=True)
        setup_logging(level="debug", json_format=True)

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_domain_errors_serialize():
    error = UniqueConstraintViolation("User", "email", "a@b.com")
    assert error.to_dict() == {
        "error": "UniqueConstraintViolation",
        "message": "User.email já existe: 'a@b.com'",
        "entity": "User",
        "details": {"field": "email", "value": "a@b.com"},
    }
    assert NotFoundError("Lead", 3).details == {"id": 3}


def test_sync_db_cli_creates_schema(tmp_path, monkeypatch):
    from click.testing import CliRunner

    from casadf.config import get_settings
    from casadf.scripts import sync_db as sync_db_module

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setattr(sync_db_module, "setup_logging", lambda: None)
    get_settings.cache_clear()
    try:
        result = CliRunner().invoke(sync_db_module.main, ["--drop"])
    finally:
        get_settings.cache_clear()

    assert result.exit_code == 0, result.output
    assert "Schema sincronizado" in result.output
    assert (tmp_path / "cli.db").exists()
