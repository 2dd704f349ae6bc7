"""Command: run the bundled send/publish demo."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import anyio
import click

if TYPE_CHECKING:
    from mediatorkit.commands._context import AppContext


@click.command()
@click.argument("name", default="World")
@click.pass_obj
def demo(app: AppContext, name: str) -> None:
    """Send a HelloRequest through a timing pipeline, then publish a Greeting."""
    from mediatorkit.demo import run_demo
    from mediatorkit.resolver import Registry

    registry = Registry(strict=app.settings.registry.strict)
    result = anyio.run(run_demo, name, registry)

    if app.settings.json_output:
        click.echo(
            json.dumps(
                {
                    "response": result.response,
                    "pipeline": result.pipeline,
                    "deliveries": result.deliveries,
                }
            )
        )
        return

    click.echo("--- Send ---")
    for line in result.pipeline:
        click.echo(line)
    click.echo(f"Response: {result.response}")
    click.echo("")
    click.echo("--- Publish (sequential) ---")
    for line in result.deliveries:
        click.echo(line)
