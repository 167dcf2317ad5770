"""Server commands."""

import os
from pathlib import Path

import cyclopts
import uvicorn

from pulse.cli.console import get_console
from pulse.cli.util import PulsePaths
from pulse.config import Config

app = cyclopts.App(name="server", help="Server management commands")

# Local config override (for development)
LOCAL_CONFIG = Path("pulse.yaml")


def _resolve_config(paths: PulsePaths, config: Path | None) -> Path | None:
    """Resolve the YAML config file, if any.

    Resolution order:
    1. Explicit config argument
    2. ./pulse.yaml (local development override)
    3. ~/.config/pulse/config.yaml (standard location)
    """
    if config is not None:
        return config
    if LOCAL_CONFIG.exists():
        return LOCAL_CONFIG
    if paths.config_file.exists():
        return paths.config_file
    return None


@app.command
def serve(
    host: str = "127.0.0.1",
    port: int = 8000,
    config: Path | None = None,
    reload: bool = False,
) -> None:
    """Run the API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        config: Path to a YAML config file.
        reload: Restart on code changes (development only).
    """
    console = get_console()
    paths = PulsePaths()
    paths.ensure_directories()

    config_file = _resolve_config(paths, config)
    if config_file is not None:
        if not config_file.exists():
            console.error(f"Config file not found: {config_file}")
            raise SystemExit(1)
        os.environ["PULSE_CONFIG_FILE"] = str(config_file.resolve())
        console.info(f"Config: {config_file}")

    console.success(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "pulse.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command
def info() -> None:
    """Show resolved paths and database settings."""
    console = get_console()
    paths = PulsePaths()
    settings = Config()  # type: ignore[call-arg]

    console.table(
        [
            {"name": "Config file", "value": paths.config_file},
            {"name": "Data directory", "value": paths.data_dir},
            {"name": "Logs", "value": paths.logs_dir},
            {"name": "Database", "value": settings.database.url},
        ],
        [("name", "Setting"), ("value", "Value")],
    )
