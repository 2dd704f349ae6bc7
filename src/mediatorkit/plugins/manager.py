"""Plugin discovery, loading, and registry population.

Discovery: entry points (group ``mediatorkit.plugins``) via pluggy, plus
single-file plugins from a local directory.

INVARIANT: A plugin that fails to load is a warning, never an error.
A plugin whose ``mediatorkit_register`` raises is a wiring bug and
propagates.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

import pluggy

from mediatorkit.plugins.hookspecs import PROJECT_NAME, MediatorHookSpec
from mediatorkit.resolver import Registry

ENTRY_POINT_GROUP = "mediatorkit.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and registry population."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(MediatorHookSpec)
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        disabled: Iterable[str] = (),
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Names in *disabled* are blocked before loading. Returns the names
        of all registered plugins.
        """
        for name in disabled:
            self._pm.set_blocked(name)
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def populate(self, registry: Registry) -> Registry:
        """Let every registered plugin add its registrations to *registry*."""
        self._pm.hook.mediatorkit_register(registry=registry)
        logger.debug("Registry populated with %d registration(s)", len(registry))
        return registry

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Load each ``*.py`` in *local_dir* (skipping ``_``-prefixed names).

        Classes defined in the module that carry hookimpl-decorated
        methods are instantiated and registered.
        """
        if not local_dir.is_dir():
            logger.debug("Local plugin directory %s does not exist", local_dir)
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"mediatorkit_local_plugin_{py_file.stem}"
            if self._pm.is_blocked(module_name):
                continue
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=module_name)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may name a class; hook calls against a class leave
        ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any ``@hookimpl``-decorated methods."""
        marker = f"{PROJECT_NAME}_impl"
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, marker, None):
                return True
        return False
