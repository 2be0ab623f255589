"""Tests for the click commands."""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from deskup.cli import main
from deskup.config import Settings, save_settings
from deskup.core.dashboard import DashboardState
from deskup.core.models import Joke, TaskItem
from deskup.core.slots import NOT_CONFIGURED, SlotSnapshot, Status


@pytest.fixture
def conf_path(tmp_path, monkeypatch):
    path = tmp_path / "config" / "deskup.conf"
    monkeypatch.setattr("deskup.config.CONFIG_FILE", path)
    monkeypatch.setattr("deskup.cli.CONFIG_FILE", path)
    return path


@pytest.fixture
def configured(conf_path):
    save_settings(Settings(), conf_path)
    return conf_path


@pytest.fixture
def runner():
    return CliRunner()


class TestInit:
    def test_creates_settings(self, runner, conf_path):
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 0
        assert conf_path.exists()
        assert "Created" in result.output

    def test_existing_settings(self, runner, conf_path):
        runner.invoke(main, ["init"])
        result = runner.invoke(main, ["init"])
        assert "already exist" in result.output

    def test_malformed_settings_is_fatal(self, runner, conf_path):
        conf_path.parent.mkdir(parents=True)
        conf_path.write_text("BOOKMARKS_WEB = [oops\n")
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestOpen:
    @patch("deskup.cli.get_launcher")
    def test_launches_bookmark(self, mock_get, runner, conf_path):
        launcher = MagicMock()
        mock_get.return_value = launcher
        result = runner.invoke(main, ["open", "google"])
        assert result.exit_code == 0
        launcher.launch.assert_called_once_with("https://google.com")

    def test_unknown_bookmark(self, runner, conf_path):
        result = runner.invoke(main, ["open", "nope"])
        assert result.exit_code == 1
        assert "no bookmark named" in result.output


class TestTasks:
    def test_not_configured(self, runner, conf_path):
        result = runner.invoke(main, ["tasks"])
        assert result.exit_code == 1
        assert "Notion" in result.output

    @patch("deskup.cli.NotionAdapter")
    def test_lists_tasks_as_json(self, mock_cls, runner, configured):
        mock_cls.from_settings.return_value.fetch_open.return_value = [TaskItem("t1", "Buy milk")]
        result = runner.invoke(main, ["tasks", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"id": "t1", "title": "Buy milk"}]

    @patch("deskup.cli.NotionAdapter")
    def test_done(self, mock_cls, runner, conf_path):
        result = runner.invoke(main, ["done", "t1"])
        assert result.exit_code == 0
        mock_cls.from_settings.return_value.mark_done.assert_called_once_with("t1")


class TestShow:
    @patch("deskup.cli.Dashboard")
    def test_json_snapshot(self, mock_cls, runner, configured):
        state = DashboardState(
            weather=NOT_CONFIGURED,
            joke=SlotSnapshot(Status.READY, value=Joke("Why?", "Because.")),
            anniversaries=SlotSnapshot(Status.READY, value=[]),
            holidays=SlotSnapshot(Status.FAILED, error="connection failed"),
            tasks=NOT_CONFIGURED,
        )
        mock_cls.return_value.snapshot.return_value = state

        result = runner.invoke(main, ["show", "--json", "--wait", "0"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["joke"] == {
            "status": "ready",
            "value": {"setup": "Why?", "punchline": "Because."},
            "error": None,
        }
        assert data["holidays"]["status"] == "failed"
        assert data["weather"]["status"] == "not_configured"
        mock_cls.return_value.shutdown.assert_called_once()

    @patch("deskup.cli.Dashboard")
    def test_text_panel(self, mock_cls, runner, conf_path):
        loading = SlotSnapshot(Status.LOADING)
        mock_cls.return_value.snapshot.return_value = DashboardState(
            loading, loading, loading, loading, NOT_CONFIGURED
        )
        result = runner.invoke(main, ["show", "--wait", "0"])
        assert result.exit_code == 0
        assert "Loading quote data..." in result.output
