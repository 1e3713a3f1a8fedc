"""CLI smoke tests (no network)."""

import pytest
from typer.testing import CliRunner

from predvenue.cli import app as cli_app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_config(monkeypatch):
    monkeypatch.setattr(cli_app, "configure_logging", lambda settings: None)


def test_venues_list_marks_active(monkeypatch):
    monkeypatch.setenv("PREDVENUE_ACTIVE_VENUE", "jupiter")
    result = runner.invoke(cli_app.app, ["venues", "list"])
    assert result.exit_code == 0
    assert "* jupiter" in result.output
    assert "  polymarket" in result.output


def test_venues_show_unknown():
    result = runner.invoke(cli_app.app, ["venues", "show", "nope"])
    assert result.exit_code == 2


def test_venues_show_known():
    result = runner.invoke(cli_app.app, ["venues", "show", "polymarket"])
    assert result.exit_code == 0
    assert '"picks_per_pack": 5' in result.output


def test_markets_unknown_venue():
    result = runner.invoke(cli_app.app, ["markets", "list", "--venue", "nope"])
    assert result.exit_code == 2
