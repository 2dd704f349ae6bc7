"""Bundled demo: one request through a timing pipeline, one notification fan-out."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from mediatorkit.behaviors import LoggingBehavior
from mediatorkit.cancellation import CancellationToken
from mediatorkit.contracts import Continuation, Notification, NotificationHandler, Request, RequestHandler
from mediatorkit.mediator import Mediator
from mediatorkit.plugins.hookspecs import hookimpl
from mediatorkit.resolver import Registry


@dataclass(frozen=True)
class HelloRequest(Request[str]):
    name: str


@dataclass(frozen=True)
class Greeting(Notification):
    message: str


class HelloHandler(RequestHandler[HelloRequest, str]):
    async def handle(self, request: HelloRequest, cancellation: CancellationToken) -> str:
        return f"Hello, {request.name}!"


class TimingBehavior(LoggingBehavior):
    """LoggingBehavior that also records its before/after lines in *trace*."""

    def __init__(self, trace: list[str]) -> None:
        super().__init__("timing")
        self._trace = trace

    async def handle(
        self,
        request: Request[Any],
        next: Continuation[Any],
        cancellation: CancellationToken,
    ) -> Any:
        request_type = type(request).__name__
        self._trace.append(f"[{self.name}] before {request_type}")
        start = time.perf_counter()
        response = await super().handle(request, next, cancellation)
        elapsed = (time.perf_counter() - start) * 1000
        self._trace.append(f"[{self.name}] after {request_type} ({elapsed:.3f} ms)")
        return response


class RecordingGreetingHandler(NotificationHandler[Greeting]):
    """Appends ``[label] message`` to a shared delivery log."""

    def __init__(self, label: str, log: list[str]) -> None:
        self.label = label
        self._log = log

    async def handle(self, notification: Greeting, cancellation: CancellationToken) -> None:
        self._log.append(f"[{self.label}] {notification.message}")


@dataclass
class DemoResult:
    response: str
    pipeline: list[str] = field(default_factory=list)
    deliveries: list[str] = field(default_factory=list)


class DemoPlugin:
    """Registers the demo handlers.

    Pipeline lines land in ``self.pipeline``; deliveries in ``self.deliveries``.
    """

    def __init__(self) -> None:
        self.pipeline: list[str] = []
        self.deliveries: list[str] = []

    @hookimpl
    def mediatorkit_register(self, registry: Registry) -> None:
        registry.add_handler(HelloRequest, HelloHandler())
        registry.add_behavior(HelloRequest, TimingBehavior(self.pipeline))
        registry.add_notification_handler(Greeting, RecordingGreetingHandler("H1", self.deliveries))
        registry.add_notification_handler(Greeting, RecordingGreetingHandler("H2", self.deliveries))


async def run_demo(name: str = "World", registry: Registry | None = None) -> DemoResult:
    """Send a HelloRequest, then publish its response as a Greeting."""
    plugin = DemoPlugin()
    if registry is None:
        registry = Registry()
    plugin.mediatorkit_register(registry)

    mediator = Mediator(registry)
    response = await mediator.send(HelloRequest(name))
    await mediator.publish(Greeting(response))
    return DemoResult(response=response, pipeline=plugin.pipeline, deliveries=plugin.deliveries)
