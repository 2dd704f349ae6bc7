"""Pluggy hook specifications for mediatorkit.

A plugin contributes handlers, pipeline behaviors, and notification
handlers by implementing ``mediatorkit_register`` and adding them to the
registry it receives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mediatorkit.resolver import Registry

PROJECT_NAME = "mediatorkit"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class MediatorHookSpec:
    """Hook specifications for the mediatorkit plugin system."""

    @hookspec
    def mediatorkit_register(self, registry: Registry) -> None:
        """Add registrations to *registry*.

        Called once per plugin, in pluggy call order (last registered
        plugin first). Behavior and notification handler order within one
        plugin is the order of the ``add_*`` calls.
        """
