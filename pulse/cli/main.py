"""Main CLI application using Cyclopts.

``server`` and ``admin`` work against the local configuration and database;
``records`` is a thin HTTP client for a running server.
"""

import cyclopts

from pulse.cli.commands import admin, records, server

app = cyclopts.App(
    name="pulse",
    help="Pulse - multi-tenant analytics ingestion",
)

app.command(server.app, name="server")
app.command(admin.app, name="admin")
app.command(records.app, name="records")


def main() -> None:
    app()
