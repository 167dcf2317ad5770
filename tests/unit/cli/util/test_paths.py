"""Tests for PulsePaths path computation."""

from pathlib import Path

import pytest

from pulse.cli.util.paths import PulsePaths


class TestPulsePathsXDGMode:
    """Tests for XDG mode (default, when PULSE_DATA_DIR is not set)."""

    def test_xdg_mode_uses_home_directory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PULSE_DATA_DIR", raising=False)
        test_home = Path("/test/home")
        monkeypatch.setattr(Path, "home", lambda: test_home)

        paths = PulsePaths()

        assert paths.config_dir == test_home / ".config" / "pulse"
        assert paths.data_dir == test_home / ".local" / "share" / "pulse"
        assert paths.state_dir == test_home / ".local" / "state" / "pulse"

    def test_xdg_mode_file_paths(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PULSE_DATA_DIR", raising=False)
        test_home = Path("/test/home")
        monkeypatch.setattr(Path, "home", lambda: test_home)

        paths = PulsePaths()

        assert paths.config_file == test_home / ".config" / "pulse" / "config.yaml"
        assert paths.database_file == test_home / ".local" / "share" / "pulse" / "pulse.db"
        assert paths.server_log == test_home / ".local" / "state" / "pulse" / "logs" / "server.log"


class TestPulsePathsOverrides:
    def test_data_dir_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PULSE_DATA_DIR moves the database but not the config directory."""
        monkeypatch.setenv("PULSE_DATA_DIR", "/data")
        test_home = Path("/test/home")
        monkeypatch.setattr(Path, "home", lambda: test_home)

        paths = PulsePaths()

        assert paths.database_file == Path("/data/pulse.db")
        assert paths.config_dir == test_home / ".config" / "pulse"

    def test_explicit_directories_win(self, tmp_path: Path) -> None:
        paths = PulsePaths(
            config_dir=tmp_path / "c", data_dir=tmp_path / "d", state_dir=tmp_path / "s"
        )

        assert paths.database_file == tmp_path / "d" / "pulse.db"
        assert paths.logs_dir == tmp_path / "s" / "logs"

    def test_ensure_directories(self, tmp_path: Path) -> None:
        paths = PulsePaths(
            config_dir=tmp_path / "c", data_dir=tmp_path / "d", state_dir=tmp_path / "s"
        )

        paths.ensure_directories()

        assert (tmp_path / "c").is_dir()
        assert (tmp_path / "d").is_dir()
        assert (tmp_path / "s" / "logs").is_dir()
