"""Records commands - HTTP client for a running server."""

import json
import os
import sys
from typing import Any

import cyclopts
import httpx

from pulse.cli.console import get_console

app = cyclopts.App(name="records", help="Query and delete records on a running server")


def get_server_url() -> str:
    """Get server URL from environment."""
    return os.environ.get("PULSE_SERVER", "http://localhost:8000")


def _headers() -> dict[str, str]:
    token = os.environ.get("PULSE_TOKEN")
    return {"Authorization": f"Bearer {token}"} if token else {}


def _dimensions_param(dimension: list[str] | None) -> dict[str, str]:
    """Turn repeated ``key=value`` options into the JSON ``dimensions`` query parameter.

    Values that parse as JSON (numbers, booleans) are sent typed; anything else as a string.
    """
    if not dimension:
        return {}
    filters = []
    for item in dimension:
        key, sep, value = item.partition("=")
        if not sep or not key:
            get_console().error(
                f"Invalid --dimension {item!r}: expected key=value",
                hint="Example: --dimension client=ANDROID",
            )
            sys.exit(1)
        try:
            parsed: Any = json.loads(value)
        except ValueError:
            parsed = value
        filters.append({"key": key, "value": parsed})
    return {"dimensions": json.dumps(filters)}


def _request(method: str, path: str, params: dict[str, Any] | None = None) -> Any:
    console = get_console()
    server_url = get_server_url()
    try:
        response = httpx.request(
            method,
            f"{server_url}/api{path}",
            params=params,
            headers=_headers(),
        )
        response.raise_for_status()
        return response.json()
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: pulse server serve",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)


@app.command(name="list")
def list_records(
    data_source_id: int,
    *,
    count: int | None = None,
    dimension: list[str] | None = None,
) -> None:
    """List records of a data source.

    Args:
        data_source_id: Numeric data source id.
        count: Maximum number of records.
        dimension: Filter as key=value; repeat for several.
    """
    params: dict[str, Any] = _dimensions_param(dimension)
    if count is not None:
        params["count"] = count

    rows = _request("GET", f"/data_sources/{data_source_id}/records", params)
    if not rows:
        get_console().warning("No records")
        return

    fixed = ["id", "value", "year", "month", "day"]
    extra = sorted({k for row in rows for k in row} - set(fixed) - {"data_source_id"})
    get_console().table(rows, [(k, k) for k in fixed + extra])


@app.command
def count(data_source_id: int, *, dimension: list[str] | None = None) -> None:
    """Count records of a data source.

    Args:
        data_source_id: Numeric data source id.
        dimension: Filter as key=value; repeat for several.
    """
    data = _request(
        "GET", f"/data_sources/{data_source_id}/records/count", _dimensions_param(dimension)
    )
    get_console().print(data["count"])


@app.command
def purge(project_uuid: str, key: str, *, force: bool = False) -> None:
    """Delete every record of a data source.

    Args:
        project_uuid: Project UUID.
        key: Data source key.
        force: Skip confirmation prompt.
    """
    console = get_console()
    if not force:
        response = input(f"Delete ALL records of {project_uuid}/{key}? [y/N] ").strip().lower()
        if response != "y":
            print("Aborted")
            sys.exit(1)

    data = _request("DELETE", f"/projects/{project_uuid}/data_sources/{key}/records/all")
    console.success(f"Deleted {data['deleted']} records")
