"""Tests for the CLI entry point and the client application context."""

import json
from unittest.mock import AsyncMock

import pytest

from ciecnow import __version__
from ciecnow.application.services.app_context import AppContext
from ciecnow.application.services.period_selector import PeriodSelector
from ciecnow.config import get_settings
from ciecnow.main import main


@pytest.fixture
def state_path(tmp_path, monkeypatch):
    path = tmp_path / "state.json"
    monkeypatch.setenv("LOCAL_STATE_PATH", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


def test_no_command_prints_banner(state_path, capsys) -> None:
    assert main([]) == 0
    assert capsys.readouterr().out.strip() == f"CIEC Now v{__version__}"


def test_period_set_persists_selection(state_path, capsys) -> None:
    assert main(["period", "--set", "2023"]) == 0

    out = capsys.readouterr().out
    assert "Periodo 2023-2024" in out
    assert "start: 2023-11-01" in out
    assert "end:   2024-10-31T23:59:59.999" in out
    assert json.loads(state_path.read_text()) == {"ciec_selected_fiscal_year": "2023"}

    main(["period"])
    assert "Periodo 2023-2024" in capsys.readouterr().out


def test_fiscal_start_month_from_environment(state_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("FISCAL_START_MONTH", "1")
    get_settings.cache_clear()

    main(["period", "--set", "2024"])

    out = capsys.readouterr().out
    assert "start: 2024-01-01" in out
    assert "end:   2024-12-31T23:59:59.999" in out


@pytest.mark.asyncio
async def test_app_context_orders_startup_and_shutdown(memory_store) -> None:
    calls = []
    session = AsyncMock()
    session.start.side_effect = lambda: calls.append("session.start")
    session.close.side_effect = lambda: calls.append("session.close")

    async def open_pool() -> None:
        calls.append("open")

    async def close_pool() -> None:
        calls.append("close")

    context = AppContext(
        session=session,
        period=PeriodSelector(memory_store),
        openers=[open_pool],
        closers=[close_pool],
    )
    await context.start()
    await context.close()

    assert calls == ["open", "session.start", "session.close", "close"]
