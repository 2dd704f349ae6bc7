"""Service descriptors, the resolver contract, and the default Registry.

The mediator never looks handlers up itself. It asks a *resolver* (any
callable taking a :data:`ServiceDescriptor`) and treats the answer as
opaque. Resolvers return ``None`` rather than raising when nothing is
registered, and return collections in execution order.

:class:`Registry` is the explicit, startup-built table most integrators
want. Anything else (a DI container adapter, a hand-written function)
works as long as it honors the same contract.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from mediatorkit.contracts import Notification, Request, response_type_of
from mediatorkit.errors import InvalidConfigurationError, qualified_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerDescriptor:
    """The single handler for ``request_type`` producing ``response_type``."""

    request_type: type
    response_type: Any


@dataclass(frozen=True)
class BehaviorsDescriptor:
    """The ordered pipeline behaviors for a request/response pair."""

    request_type: type
    response_type: Any


@dataclass(frozen=True)
class NotificationHandlersDescriptor:
    """The ordered handlers for ``notification_type``."""

    notification_type: type


type ServiceDescriptor = HandlerDescriptor | BehaviorsDescriptor | NotificationHandlersDescriptor
type Resolver = Callable[[ServiceDescriptor], object | None]

RegistrationKind = Literal["handler", "behavior", "notification_handler"]


@dataclass(frozen=True)
class Registration:
    """One registry entry, for diagnostics and the ``registry`` command."""

    kind: RegistrationKind
    message_type: str
    response_type: str | None
    instance_type: str

    def as_dict(self) -> dict[str, str | None]:
        return {
            "kind": self.kind,
            "message_type": self.message_type,
            "response_type": self.response_type,
            "instance_type": self.instance_type,
        }


class Registry:
    """Explicit descriptor-keyed table usable directly as a resolver.

    Parameters:
        strict: Reject a second single handler for the same
            request/response pair instead of silently keeping one.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self._strict = strict
        self._handlers: dict[HandlerDescriptor, object] = {}
        self._behaviors: dict[BehaviorsDescriptor, list[object]] = {}
        self._notification_handlers: dict[NotificationHandlersDescriptor, list[object]] = {}

    @property
    def strict(self) -> bool:
        return self._strict

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_handler(
        self,
        request_type: type[Request[Any]],
        handler: object,
        *,
        response_type: Any = None,
        replace: bool = False,
    ) -> Registry:
        """Register the single handler for *request_type*.

        *response_type* defaults to the type the request class declares.
        """
        _require_subclass(request_type, Request, "request")
        key = HandlerDescriptor(request_type, _response_for(request_type, response_type))
        if key in self._handlers and not replace:
            msg = (
                f"A handler for request type '{qualified_name(key.request_type)}' with "
                f"response type '{qualified_name(key.response_type)}' is already registered."
            )
            if self._strict:
                raise InvalidConfigurationError(msg)
            logger.warning("%s Keeping the first registration.", msg)
            return self
        self._handlers[key] = handler
        logger.debug("Registered handler %s for %s", type(handler).__name__, request_type.__name__)
        return self

    def add_behavior(
        self,
        request_type: type[Request[Any]],
        behavior: object,
        *,
        response_type: Any = None,
    ) -> Registry:
        """Append *behavior*; earlier registrations wrap later ones."""
        _require_subclass(request_type, Request, "request")
        key = BehaviorsDescriptor(request_type, _response_for(request_type, response_type))
        self._behaviors.setdefault(key, []).append(behavior)
        logger.debug("Registered behavior %s for %s", type(behavior).__name__, request_type.__name__)
        return self

    def add_notification_handler(
        self,
        notification_type: type[Notification],
        handler: object,
    ) -> Registry:
        """Append *handler*; handlers run in registration order."""
        _require_subclass(notification_type, Notification, "notification")
        key = NotificationHandlersDescriptor(notification_type)
        self._notification_handlers.setdefault(key, []).append(handler)
        logger.debug(
            "Registered notification handler %s for %s",
            type(handler).__name__,
            notification_type.__name__,
        )
        return self

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def __call__(self, descriptor: ServiceDescriptor) -> object | None:
        """Resolve *descriptor*; collections are returned as tuple snapshots."""
        match descriptor:
            case HandlerDescriptor():
                return self._handlers.get(descriptor)
            case BehaviorsDescriptor():
                behaviors = self._behaviors.get(descriptor)
                return tuple(behaviors) if behaviors is not None else None
            case NotificationHandlersDescriptor():
                handlers = self._notification_handlers.get(descriptor)
                return tuple(handlers) if handlers is not None else None
        return None

    def registrations(self) -> list[Registration]:
        """List every entry: handlers, then behaviors, then notification handlers."""
        rows: list[Registration] = []
        for hkey, handler in self._handlers.items():
            rows.append(
                Registration(
                    "handler",
                    qualified_name(hkey.request_type),
                    qualified_name(hkey.response_type),
                    qualified_name(type(handler)),
                )
            )
        for bkey, behaviors in self._behaviors.items():
            rows.extend(
                Registration(
                    "behavior",
                    qualified_name(bkey.request_type),
                    qualified_name(bkey.response_type),
                    qualified_name(type(behavior)),
                )
                for behavior in behaviors
            )
        for nkey, handlers in self._notification_handlers.items():
            rows.extend(
                Registration(
                    "notification_handler",
                    qualified_name(nkey.notification_type),
                    None,
                    qualified_name(type(handler)),
                )
                for handler in handlers
            )
        return rows

    def __len__(self) -> int:
        return (
            len(self._handlers)
            + sum(len(b) for b in self._behaviors.values())
            + sum(len(h) for h in self._notification_handlers.values())
        )


def _response_for(request_type: type, response_type: Any) -> Any:
    return response_type if response_type is not None else response_type_of(request_type)


def _require_subclass(tp: object, base: type, label: str) -> None:
    if not isinstance(tp, type) or not issubclass(tp, base):
        msg = f"Expected a {label} class deriving from {base.__name__}, got {tp!r}"
        raise InvalidConfigurationError(msg)
