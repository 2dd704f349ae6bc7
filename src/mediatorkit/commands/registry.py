"""Command: list handler, behavior, and notification handler registrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mediatorkit.output import render_registrations

if TYPE_CHECKING:
    from mediatorkit.commands._context import AppContext


@click.command()
@click.option("--demo", "include_demo", is_flag=True, help="Include the bundled demo plugin.")
@click.pass_obj
def registry(app: AppContext, include_demo: bool) -> None:
    """List registrations contributed by plugins."""
    if include_demo:
        from mediatorkit.demo import DemoPlugin

        app.plugin_manager.register_plugin(DemoPlugin(), name="demo")

    entries = app.build_registry().registrations()
    click.echo(render_registrations(entries, json_output=app.settings.json_output))
