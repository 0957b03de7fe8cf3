# File: tests/test_cli.py
"""Тесты для CLI (`web_delta.cli`) с использованием click.testing.CliRunner.
Проверяют обязательные опции, быстрый режим, сохранение артефактов и обработку ошибок.
"""
import json

import pytest
import web_delta.cli as cli_module
from click.testing import CliRunner
from web_delta.cli import cli
from web_delta.logger import init_logging
from web_delta.renderer.base import RendererSetupError

from conftest import make_run


@pytest.fixture(autouse=True)
def restore_logging():
    """CliRunner подменяет stdout; после теста возвращаем обработчики логгера."""
    yield
    init_logging()


@pytest.fixture()
def captured(monkeypatch):
    """Патчим start_comparison: конфиг сохраняется, обхода нет."""
    seen = {}

    async def fake_comparison(cfg):
        seen["config"] = cfg
        return make_run()

    monkeypatch.setattr(cli_module, "start_comparison", fake_comparison)
    return seen


def dirs(tmp_path):
    return ["--snapshots-dir", str(tmp_path / "snaps"), "--results-dir", str(tmp_path / "results")]


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "Web Delta" in result.output


@pytest.mark.parametrize("args", [[], ["--old", "https://old.example"], ["-n", "https://new.example"]])
def test_missing_required_flags_exit_1(args, captured):
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 1
    assert "config" not in captured


def test_full_run_writes_artifacts(tmp_path, captured):
    result = CliRunner().invoke(
        cli, ["--old=https://old.example", "--new=https://new.example", *dirs(tmp_path)]
    )
    assert result.exit_code == 0, result.output
    assert "full migration comparison completed successfully!" in result.output

    cfg = captured["config"]
    assert cfg.old_url == "https://old.example"
    assert cfg.page_budget is None

    results = list((tmp_path / "results").glob("migration_comparison_*.json"))
    assert len(results) == 1
    data = json.loads(results[0].read_text(encoding="utf-8"))
    assert data["missingUrls"] == ["https://new.example/about"]
    assert list((tmp_path / "results").glob("migration_report_*.md"))
    assert len(list((tmp_path / "snaps").glob("*_website_*.json"))) == 2


def test_quick_mode_short_flags(tmp_path, captured):
    result = CliRunner().invoke(
        cli, ["-o", "https://old.example", "-n", "https://new.example", "--quick", *dirs(tmp_path)]
    )
    assert result.exit_code == 0, result.output
    assert captured["config"].page_budget == 10
    assert "quick migration comparison" in result.output


def test_config_file_with_overrides(tmp_path, captured):
    cfg_file = tmp_path / "web_delta.yaml"
    cfg_file.write_text(
        "old_url: https://old.example\nnew_url: https://new.example\nmax_pages: 7\n"
        "render:\n  engine: static\n",
        encoding="utf-8",
    )
    result = CliRunner().invoke(
        cli, ["--config", str(cfg_file), "--new", "https://staging.example", "--schema", "reduced", *dirs(tmp_path)]
    )
    assert result.exit_code == 0, result.output
    cfg = captured["config"]
    assert cfg.new_url == "https://staging.example"
    assert cfg.max_pages == 7
    assert cfg.field_schema == "reduced"
    assert cfg.render.engine == "static"


def test_invalid_url_exit_1(tmp_path, captured):
    result = CliRunner().invoke(cli, ["--old", "old.example", "--new", "https://new.example", *dirs(tmp_path)])
    assert result.exit_code == 1
    assert "config" not in captured


def test_renderer_setup_error_exit_1(tmp_path, monkeypatch):
    async def broken(cfg):
        raise RendererSetupError("Cannot launch headless browser")

    monkeypatch.setattr(cli_module, "start_comparison", broken)
    result = CliRunner().invoke(cli, ["-o", "https://old.example", "-n", "https://new.example", *dirs(tmp_path)])
    assert result.exit_code == 1


def test_unexpected_failure_exit_1(tmp_path, monkeypatch):
    async def broken(cfg):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "start_comparison", broken)
    result = CliRunner().invoke(cli, ["-o", "https://old.example", "-n", "https://new.example", *dirs(tmp_path)])
    assert result.exit_code == 1
