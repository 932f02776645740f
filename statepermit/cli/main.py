"""Main CLI application using Cyclopts."""

import cyclopts

from statepermit.cli.commands import check, explain
from statepermit.config import configure_tracing

app = cyclopts.App(
    name="statepermit",
    help="Hierarchical state permissions - CLI",
)

app.command(check.app, name="check")
app.command(explain.app, name="explain")


def main() -> None:
    configure_tracing()
    app()
