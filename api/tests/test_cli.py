"""Unit tests for the management CLI."""

import logging
from unittest.mock import patch

import pytest

import cli


@pytest.fixture(autouse=True)
def _clean_root_logger():
    """cli.main() reconfigures logging; restore the root logger afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)


@pytest.mark.unit
class TestServeCommand:
    def test_runs_uvicorn_on_configured_port(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.setenv("PORT", "4321")

        with patch("uvicorn.run") as mock_run:
            assert cli.main(["serve"]) == 0

        mock_run.assert_called_once_with(
            "main:app",
            host="0.0.0.0",
            port=4321,
            reload=False,
            log_config=None,
        )

    def test_reload_flag(self):
        with patch("uvicorn.run") as mock_run:
            cli.main(["serve", "--reload"])

        assert mock_run.call_args.kwargs["reload"] is True


@pytest.mark.unit
class TestMigrateCommand:
    def test_upgrades_to_head(self):
        with patch("alembic.command.upgrade") as mock_upgrade:
            assert cli.main(["migrate"]) == 0

        config, target = mock_upgrade.call_args.args
        assert target == "head"
        assert config.get_main_option("script_location").endswith("alembic")

    def test_explicit_target(self):
        with patch("alembic.command.upgrade") as mock_upgrade:
            cli.main(["migrate", "0001_baseline"])

        assert mock_upgrade.call_args.args[1] == "0001_baseline"


@pytest.mark.unit
class TestNoCommand:
    def test_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "serve" in capsys.readouterr().out
