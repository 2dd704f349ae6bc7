"""Tests for PluginManager — discovery, registration, and registry population."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediatorkit.config.settings import MediatorSettings
from mediatorkit.errors import InvalidConfigurationError
from mediatorkit.plugins import build_registry, hookimpl
from mediatorkit.plugins.manager import PluginManager
from mediatorkit.resolver import HandlerDescriptor, NotificationHandlersDescriptor, Registry
from tests.conftest import Ping, Pinged, PingHandler, RecordingNotificationHandler


class _PingPlugin:
    @hookimpl
    def mediatorkit_register(self, registry: Registry) -> None:
        registry.add_handler(Ping, PingHandler(7))


class _ListenerPlugin:
    def __init__(self) -> None:
        self.log: list[str] = []

    @hookimpl
    def mediatorkit_register(self, registry: Registry) -> None:
        registry.add_notification_handler(Pinged, RecordingNotificationHandler("L", self.log))


_LOCAL_PLUGIN = '''
from mediatorkit.plugins import hookimpl
from mediatorkit.contracts import Request, RequestHandler


class Hello(Request[str]):
    pass


class HelloHandler(RequestHandler[Hello, str]):
    async def handle(self, request, cancellation):
        return "hi"


class LocalPlugin:
    @hookimpl
    def mediatorkit_register(self, registry):
        registry.add_handler(Hello, HelloHandler())
'''


class TestPluginManager:
    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_PingPlugin(), name="ping")
        assert "ping" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_PingPlugin())
        assert "_PingPlugin" in pm.list_plugin_names()

    def test_is_loaded_flips_after_discover(self) -> None:
        pm = PluginManager()
        assert pm.is_loaded is False
        pm.discover_and_load()
        assert pm.is_loaded is True

    def test_populate_collects_every_plugin(self) -> None:
        pm = PluginManager()
        listener = _ListenerPlugin()
        pm.register_plugin(_PingPlugin(), name="ping")
        pm.register_plugin(listener, name="listener")

        registry = pm.populate(Registry())
        assert isinstance(registry(HandlerDescriptor(Ping, int)), PingHandler)
        assert len(registry(NotificationHandlersDescriptor(Pinged))) == 1  # type: ignore[arg-type]

    def test_registration_errors_propagate(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_PingPlugin(), name="first")
        pm.register_plugin(_PingPlugin(), name="second")
        with pytest.raises(InvalidConfigurationError):
            pm.populate(Registry(strict=True))


class TestLocalDiscovery:
    def test_loads_single_file_plugins(self, tmp_path: Path) -> None:
        (tmp_path / "hello.py").write_text(_LOCAL_PLUGIN)
        (tmp_path / "_private.py").write_text("raise RuntimeError('never imported')\n")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path)
        assert "mediatorkit_local_plugin_hello" in names
        assert "mediatorkit_local_plugin__private" not in names
        assert len(pm.populate(Registry())) == 1

    def test_broken_plugin_is_a_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "broken.py").write_text("import does_not_exist_anywhere\n")
        pm = PluginManager()
        with caplog.at_level("WARNING"):
            names = pm.discover_and_load(local_dir=tmp_path)
        assert "mediatorkit_local_plugin_broken" not in names
        assert "Failed to load local plugin" in caplog.text

    def test_disabled_plugins_are_blocked(self, tmp_path: Path) -> None:
        (tmp_path / "hello.py").write_text(_LOCAL_PLUGIN)
        pm = PluginManager()
        names = pm.discover_and_load(
            local_dir=tmp_path, disabled=["mediatorkit_local_plugin_hello"]
        )
        assert "mediatorkit_local_plugin_hello" not in names

    def test_missing_directory_is_ignored(self, tmp_path: Path) -> None:
        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path / "nope")
        assert pm.is_loaded is True


class TestBuildRegistry:
    def test_uses_strict_setting(self, project_root: Path) -> None:
        (project_root / "mediatorkit.toml").write_text("[registry]\nstrict = false\n")
        settings = MediatorSettings.from_cli(project_root=project_root)
        registry = build_registry(settings, PluginManager())
        assert registry.strict is False

    def test_populates_from_local_dir(self, project_root: Path) -> None:
        plugins = project_root / "handlers"
        plugins.mkdir()
        (plugins / "hello.py").write_text(_LOCAL_PLUGIN)
        (project_root / "mediatorkit.toml").write_text('[plugins]\nlocal_dir = "handlers"\n')

        settings = MediatorSettings.from_cli(project_root=project_root)
        registry = build_registry(settings)
        assert [r.kind for r in registry.registrations()] == ["handler"]

    def test_plugins_disabled_skips_discovery(self, project_root: Path) -> None:
        plugins = project_root / "handlers"
        plugins.mkdir()
        (plugins / "hello.py").write_text(_LOCAL_PLUGIN)
        (project_root / "mediatorkit.toml").write_text(
            '[plugins]\nenabled = false\nlocal_dir = "handlers"\n'
        )

        pm = PluginManager()
        pm.register_plugin(_PingPlugin(), name="direct")
        registry = build_registry(MediatorSettings.from_cli(project_root=project_root), pm)
        assert pm.is_loaded is False
        assert [r.message_type.rsplit(".", 1)[-1] for r in registry.registrations()] == ["Ping"]
