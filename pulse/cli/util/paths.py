"""Manages Pulse directory structure following XDG Base Directory spec.

Directory layout:
    ~/.config/pulse/
        config.yaml         # User configuration

    ~/.local/share/pulse/
        pulse.db            # SQLite database

    ~/.local/state/pulse/
        logs/
            server.log      # Server logs
"""

import os
from pathlib import Path


class PulsePaths:
    """Manages Pulse paths following XDG Base Directory specification.

    PULSE_DATA_DIR overrides the data directory. Individual directories can
    also be overridden for testing.
    """

    def __init__(
        self,
        *,
        config_dir: Path | None = None,
        data_dir: Path | None = None,
        state_dir: Path | None = None,
    ) -> None:
        home = Path.home()
        env_data_dir = os.environ.get("PULSE_DATA_DIR")
        self._config_dir = config_dir or home / ".config" / "pulse"
        self._data_dir = data_dir or (
            Path(env_data_dir).expanduser() if env_data_dir else home / ".local" / "share" / "pulse"
        )
        self._state_dir = state_dir or home / ".local" / "state" / "pulse"

    @property
    def config_dir(self) -> Path:
        """Config directory (~/.config/pulse)."""
        return self._config_dir

    @property
    def data_dir(self) -> Path:
        """Data directory (~/.local/share/pulse)."""
        return self._data_dir

    @property
    def state_dir(self) -> Path:
        """State directory (~/.local/state/pulse)."""
        return self._state_dir

    @property
    def config_file(self) -> Path:
        """Main config file."""
        return self._config_dir / "config.yaml"

    @property
    def database_file(self) -> Path:
        """SQLite database file."""
        return self._data_dir / "pulse.db"

    @property
    def logs_dir(self) -> Path:
        """Logs directory."""
        return self._state_dir / "logs"

    @property
    def server_log(self) -> Path:
        """Server log file."""
        return self.logs_dir / "server.log"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
