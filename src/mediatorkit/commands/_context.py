"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The plugin-populated registry is built lazily so
``--help`` and ``--version`` never import plugins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediatorkit.config.settings import MediatorSettings
    from mediatorkit.plugins.manager import PluginManager
    from mediatorkit.resolver import Registry


class AppContext:
    """Settings plus the lazily built plugin manager and registry."""

    def __init__(self, settings: MediatorSettings) -> None:
        self.settings = settings
        self._plugin_manager: PluginManager | None = None

        from mediatorkit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def plugin_manager(self) -> PluginManager:
        if self._plugin_manager is None:
            from mediatorkit.plugins.manager import PluginManager

            self._plugin_manager = PluginManager()
        return self._plugin_manager

    def build_registry(self) -> Registry:
        """A fresh Registry populated from configured plugins."""
        from mediatorkit.plugins import build_registry

        return build_registry(self.settings, self.plugin_manager)
