"""Shared pytest fixtures and message types for mediatorkit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mediatorkit.cancellation import CancellationToken
from mediatorkit.contracts import (
    Continuation,
    Notification,
    NotificationHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
)
from mediatorkit.resolver import Registry

# ---------------------------------------------------------------------------
# Message types and recording handlers shared across test modules
# ---------------------------------------------------------------------------


class Ping(Request[int]):
    pass


class Pinged(Notification):
    pass


class PingHandler(RequestHandler[Ping, int]):
    """Returns a fixed value and records each call."""

    def __init__(self, value: int = 1, log: list[str] | None = None) -> None:
        self.value = value
        self.calls = 0
        self._log = log

    async def handle(self, request: Ping, cancellation: CancellationToken) -> int:
        self.calls += 1
        if self._log is not None:
            self._log.append("handler")
        return self.value


class RecordingBehavior(PipelineBehavior[Ping, int]):
    """Logs ``<name>.before`` / ``<name>.after`` around the continuation."""

    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self._log = log

    async def handle(
        self, request: Ping, next: Continuation[int], cancellation: CancellationToken
    ) -> int:
        self._log.append(f"{self.name}.before")
        result = await next()
        self._log.append(f"{self.name}.after")
        return result


class RecordingNotificationHandler(NotificationHandler[Pinged]):
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self._log = log

    async def handle(self, notification: Pinged, cancellation: CancellationToken) -> None:
        self._log.append(self.name)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> Registry:
    """An empty strict registry."""
    return Registry()


@pytest.fixture
def call_log() -> list[str]:
    return []


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temp project directory as CWD, isolated from MEDIATORKIT_* env vars."""
    monkeypatch.delenv("MEDIATORKIT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo root handler changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("mediatorkit")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


def resolver_from(services: dict[Any, Any]) -> Any:
    """A dict-backed resolver: missing descriptors resolve to None."""
    return services.get
