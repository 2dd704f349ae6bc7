"""Rich rendering helpers for CLI output.

Consoles render to a StringIO buffer so commands can route the text
through ``click.echo`` (and ``CliRunner`` captures it). In non-TTY
environments Rich disables color codes automatically.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from io import StringIO
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from mediatorkit.resolver import Registration

MEDIATOR_THEME = Theme(
    {
        "mk.kind.handler": "bold green",
        "mk.kind.behavior": "bold cyan",
        "mk.kind.notification_handler": "bold yellow",
        "mk.type": "bold",
        "mk.dim": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=MEDIATOR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_registrations(registrations: Sequence[Registration], *, json_output: bool = False) -> str:
    """Render registry entries as a table, or as a JSON document."""
    if json_output:
        payload: dict[str, Any] = {
            "count": len(registrations),
            "items": [r.as_dict() for r in registrations],
        }
        return json.dumps(payload, indent=2)

    console = create_console()
    if not registrations:
        console.print("No registrations.", style="mk.dim")
        return get_output(console).rstrip("\n")

    table = Table(title=f"Registrations ({len(registrations)})")
    table.add_column("Kind")
    table.add_column("Message type", style="mk.type")
    table.add_column("Response type")
    table.add_column("Instance")
    for r in registrations:
        table.add_row(
            f"[mk.kind.{r.kind}]{r.kind}[/]",
            escape(r.message_type),
            escape(r.response_type or "-"),
            escape(r.instance_type),
        )
    console.print(table)
    return get_output(console).rstrip("\n")
