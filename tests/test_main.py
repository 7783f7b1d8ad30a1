from unittest.mock import AsyncMock

import pytest

import main
from core.config import load_config


@pytest.fixture
def repl(monkeypatch, capsys):
    """Run the text REPL over an in-memory log with scripted input lines."""
    config = load_config()
    config.storage.backend = "memory"
    monkeypatch.setattr(main, "load_config", lambda: config)

    async def run(*lines: str) -> str:
        script = iter([*lines, "/quit"])
        monkeypatch.setattr("builtins.input", lambda _prompt="": next(script))
        await main.text_repl()
        return capsys.readouterr().out

    return run


@pytest.mark.asyncio
async def test_repl_missing_file_keeps_session(repl, tmp_path):
    missing = tmp_path / "missing.json"
    out = await repl(f"/import {missing}", f"/review {missing}", "/stats")
    assert out.count("Error:") == 2
    assert "total" in out


@pytest.mark.asyncio
async def test_repl_export_import(repl, tmp_path):
    target = tmp_path / "history.json"
    out = await repl(f"/export {target}", f"/import {target}")
    assert "Exported 0 records" in out
    assert "Import complete." in out


@pytest.mark.asyncio
async def test_repl_health(repl, monkeypatch):
    monkeypatch.setattr(main.LLMClient, "health", AsyncMock(return_value={"status": "ok"}))
    out = await repl("/health")
    assert "LLM: {'status': 'ok'}" in out
