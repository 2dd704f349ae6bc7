"""Extension layer — plugin-populated registries via pluggy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mediatorkit.plugins.hookspecs import hookimpl
from mediatorkit.plugins.manager import PluginManager
from mediatorkit.resolver import Registry

if TYPE_CHECKING:
    from mediatorkit.config.settings import MediatorSettings

__all__ = ["PluginManager", "build_registry", "hookimpl"]


def build_registry(
    settings: MediatorSettings,
    plugin_manager: PluginManager | None = None,
) -> Registry:
    """Build a Registry honoring *settings*, populated from plugins.

    Discovery runs only when plugins are enabled and *plugin_manager* has
    not been loaded yet; plugins registered on it directly always apply.
    """
    registry = Registry(strict=settings.registry.strict)
    pm = plugin_manager or PluginManager()
    if settings.plugins.enabled and not pm.is_loaded:
        pm.discover_and_load(local_dir=settings.plugin_dir, disabled=settings.plugins.disabled)
    return pm.populate(registry)
