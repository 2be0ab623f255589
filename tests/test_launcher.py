"""Tests for platform launchers."""

from unittest.mock import patch

import pytest

from deskup.adapters.launcher import (
    LaunchError,
    MacLauncher,
    WindowsLauncher,
    XdgLauncher,
    _SpawnLauncher,
    get_launcher,
)


class TestSpawnLauncher:
    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            _SpawnLauncher()

    def test_subclass_must_define_command(self):
        class NoCommand(_SpawnLauncher):
            pass

        with pytest.raises(TypeError):
            NoCommand()


class TestGetLauncher:
    @pytest.mark.parametrize(
        "platform, expected",
        [("win32", WindowsLauncher), ("darwin", MacLauncher), ("linux", XdgLauncher)],
    )
    def test_platform_selection(self, platform, expected):
        assert isinstance(get_launcher(platform), expected)


class TestLaunch:
    @patch("deskup.adapters.launcher.subprocess.Popen")
    def test_xdg_open(self, mock_popen):
        XdgLauncher().launch("https://google.com")
        assert mock_popen.call_args[0][0] == ["xdg-open", "https://google.com"]

    @patch("deskup.adapters.launcher.subprocess.Popen")
    def test_windows_start(self, mock_popen):
        WindowsLauncher().launch("notepad")
        assert mock_popen.call_args[0][0] == ["cmd", "/C", "start", "", "notepad"]

    @patch("deskup.adapters.launcher.subprocess.Popen")
    def test_mac_open(self, mock_popen):
        MacLauncher().launch("/Applications/Notes.app")
        assert mock_popen.call_args[0][0] == ["open", "/Applications/Notes.app"]

    @patch("deskup.adapters.launcher.subprocess.Popen", side_effect=FileNotFoundError("xdg-open"))
    def test_spawn_failure_raises_launch_error(self, mock_popen):
        with pytest.raises(LaunchError):
            XdgLauncher().launch("https://google.com")

    @patch("deskup.adapters.launcher.subprocess.Popen")
    def test_empty_target(self, mock_popen):
        with pytest.raises(LaunchError):
            XdgLauncher().launch("  ")
        mock_popen.assert_not_called()
