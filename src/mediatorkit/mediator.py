"""Mediator — resolves and runs handlers for requests and notifications.

``send`` routes a request to exactly one handler, wrapped by the pipeline
behaviors the resolver returns. The first behavior is the outermost: it
runs first and finishes last.

``publish`` delivers a notification to every resolved handler, strictly
one after another. The first failure stops delivery and reaches the
caller unchanged; handlers that already ran are not compensated.

The mediator holds no state besides the resolver and re-queries it on
every call.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Iterable
from typing import Any

from mediatorkit.cancellation import CancellationToken
from mediatorkit.contracts import (
    Continuation,
    Notification,
    NotificationHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
    is_compatible,
    response_type_of,
)
from mediatorkit.errors import (
    HandlerNotFoundError,
    InvalidArgumentError,
    InvalidConfigurationError,
    qualified_name,
)
from mediatorkit.resolver import (
    BehaviorsDescriptor,
    HandlerDescriptor,
    NotificationHandlersDescriptor,
    Resolver,
)

logger = logging.getLogger(__name__)


class Mediator:
    """Dispatches requests and notifications through a caller-supplied resolver.

    Parameters:
        resolver: Callable mapping a service descriptor to an instance, an
            ordered collection, or ``None``.
    """

    def __init__(self, resolver: Resolver) -> None:
        if resolver is None or not callable(resolver):
            msg = "resolver must be a callable"
            raise InvalidArgumentError(msg)
        self._resolver = resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def send[R](
        self,
        request: Request[R],
        cancellation: CancellationToken = CancellationToken.NONE,
    ) -> R:
        """Send *request* to its handler and return the response.

        Raises:
            InvalidArgumentError: *request* is ``None`` or not a Request.
            HandlerNotFoundError: No handler is registered for the pair.
            InvalidConfigurationError: The resolver returned an instance
                that does not satisfy the handler or behavior contract.
                A behaviors result that is not an iterable collection is
                rejected here rather than treated as "no behaviors".
        """
        if request is None:
            msg = "request must not be None"
            raise InvalidArgumentError(msg)
        if not isinstance(request, Request):
            msg = f"Expected a Request instance, got {type(request).__name__}"
            raise InvalidArgumentError(msg)

        request_type = type(request)
        response_type = response_type_of(request_type)

        handler = self._resolver(HandlerDescriptor(request_type, response_type))
        if handler is None:
            raise HandlerNotFoundError(request_type, response_type)
        if not is_compatible(handler, RequestHandler, request_type, response_type):
            raise InvalidConfigurationError(
                _not_assignable("handler", RequestHandler, request_type, response_type, handler)
            )

        behaviors = self._resolve_behaviors(request_type, response_type)
        logger.debug(
            "Sending %s to %s through %d behavior(s)",
            request_type.__name__,
            type(handler).__name__,
            len(behaviors),
        )

        async def invoke_handler() -> R:
            return await _awaited(
                handler.handle(request, cancellation), "handler", type(handler)  # type: ignore[attr-defined]
            )

        pipeline: Continuation[R] = invoke_handler
        for behavior in reversed(behaviors):
            pipeline = _wrap(behavior, request, pipeline, cancellation)

        return await pipeline()

    async def publish(
        self,
        notification: Notification,
        cancellation: CancellationToken = CancellationToken.NONE,
    ) -> None:
        """Deliver *notification* to each resolved handler in order.

        Raises:
            InvalidArgumentError: *notification* is ``None`` or not a Notification.
            InvalidConfigurationError: A resolved entry does not satisfy the
                notification handler contract.
                A handlers result that is not an iterable collection is
                rejected here rather than treated as "no handlers".
        """
        if notification is None:
            msg = "notification must not be None"
            raise InvalidArgumentError(msg)
        if not isinstance(notification, Notification):
            msg = f"Expected a Notification instance, got {type(notification).__name__}"
            raise InvalidArgumentError(msg)

        notification_type = type(notification)
        handlers = self._resolver(NotificationHandlersDescriptor(notification_type))
        if handlers is None:
            logger.debug("No handlers for %s", notification_type.__name__)
            return

        delivered = 0
        for handler in _iterate(handlers, "notification handlers"):
            if handler is None:
                continue
            if not is_compatible(handler, NotificationHandler, notification_type):
                raise InvalidConfigurationError(
                    _not_assignable("notification handler", NotificationHandler, notification_type, None, handler)
                )
            await _awaited(
                handler.handle(notification, cancellation),  # type: ignore[attr-defined]
                "notification handler",
                type(handler),
            )
            delivered += 1
        logger.debug("Published %s to %d handler(s)", notification_type.__name__, delivered)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve_behaviors(self, request_type: type, response_type: Any) -> list[object]:
        resolved = self._resolver(BehaviorsDescriptor(request_type, response_type))
        if resolved is None:
            return []
        behaviors: list[object] = []
        for behavior in _iterate(resolved, "pipeline behaviors"):
            if behavior is None:
                continue
            if not is_compatible(behavior, PipelineBehavior, request_type, response_type):
                raise InvalidConfigurationError(
                    _not_assignable("pipeline behavior", PipelineBehavior, request_type, response_type, behavior)
                )
            behaviors.append(behavior)
        return behaviors


def _wrap[R](
    behavior: Any,
    request: Request[R],
    inner: Continuation[R],
    cancellation: CancellationToken,
) -> Continuation[R]:
    """Build the continuation that runs *behavior* around *inner*."""

    async def invoke_behavior() -> R:
        return await _awaited(
            behavior.handle(request, inner, cancellation), "pipeline behavior", type(behavior)
        )

    return invoke_behavior


async def _awaited[T](result: Awaitable[T], role: str, owner: type) -> T:
    if not inspect.isawaitable(result):
        msg = (
            f"The {role} '{qualified_name(owner)}' returned a non-awaitable "
            f"{type(result).__name__} from handle()."
        )
        raise InvalidConfigurationError(msg)
    return await result


def _iterate(resolved: object, what: str) -> Iterable[Any]:
    if isinstance(resolved, Iterable) and not isinstance(resolved, (str, bytes)):
        return resolved
    msg = f"The resolver returned a {type(resolved).__name__} where a collection of {what} was expected."
    raise InvalidConfigurationError(msg)


def _not_assignable(
    role: str,
    contract: type,
    message_type: type,
    response_type: Any,
    instance: object,
) -> str:
    names = [qualified_name(message_type)]
    if response_type is not None:
        names.append(qualified_name(response_type))
    expected = f"{qualified_name(contract)}[{', '.join(names)}]"
    return (
        f"Resolved {role} instance is not assignable to '{expected}'. "
        f"Actual type: '{qualified_name(type(instance))}'."
    )
