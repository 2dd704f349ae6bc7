"""Envelope types and handler/behavior contracts.

Requests and notifications are plain classes deriving from the markers
below. A request fixes its response type in the class declaration::

    class Ping(Request[int]):
        pass

Handlers and behaviors implement one ``async handle`` method. Instances
that do not subclass any of the ABCs are accepted when they expose a
``handle`` taking the contract's arguments; subclasses that declare type arguments are checked against the
runtime message type before they are invoked.
"""

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar, get_args, get_origin

if TYPE_CHECKING:
    from mediatorkit.cancellation import CancellationToken

type Continuation[R] = Callable[[], Awaitable[R]]


class Request[R]:
    """Marker for a value dispatched to exactly one handler, producing ``R``."""

    __slots__ = ()


class Notification:
    """Marker for a value delivered to every handler registered for its type."""

    __slots__ = ()


class RequestHandler[TRequest: Request[Any], TResponse](ABC):
    """Handles one request type and produces its response."""

    @abstractmethod
    async def handle(self, request: TRequest, cancellation: CancellationToken) -> TResponse:
        """Handle *request* and return the response."""
        ...


class NotificationHandler[TNotification: Notification](ABC):
    """Reacts to one notification type. Many may exist per type."""

    @abstractmethod
    async def handle(self, notification: TNotification, cancellation: CancellationToken) -> None:
        """Handle *notification*."""
        ...


class PipelineBehavior[TRequest: Request[Any], TResponse](ABC):
    """Wraps handler execution for one request/response pair.

    A behavior either awaits ``next()`` exactly once or not at all
    (short-circuit). Calling ``next()`` more than once is unsupported.
    """

    @abstractmethod
    async def handle(
        self,
        request: TRequest,
        next: Continuation[TResponse],
        cancellation: CancellationToken,
    ) -> TResponse:
        """Run around (or instead of) the rest of the pipeline."""
        ...


# ---------------------------------------------------------------------------
# Runtime type introspection
# ---------------------------------------------------------------------------


def declared_type_args(cls: type, generic: type) -> tuple[Any, ...] | None:
    """Return the type arguments *cls* binds for *generic*, or None.

    Follows intermediate generic subclasses, substituting their type
    parameters, so ``class Q[T](Request[list[T]])`` and
    ``class GetIds(Q[int])`` resolve to ``(list[int],)``.
    """
    bases = cls.__dict__.get("__orig_bases__", cls.__bases__)
    for base in bases:
        origin = get_origin(base) or base
        args = get_args(base)
        if origin is generic:
            return args or None
        if not isinstance(origin, type) or not issubclass(origin, generic):
            continue
        inner = declared_type_args(origin, generic)
        if inner is None:
            continue
        if not args:
            return inner
        subst = dict(zip(getattr(origin, "__parameters__", ()), args, strict=False))
        return tuple(_substitute(arg, subst) for arg in inner)
    return None


def _substitute(arg: Any, subst: dict[Any, Any]) -> Any:
    if isinstance(arg, TypeVar):
        return subst.get(arg, arg)
    params = getattr(arg, "__parameters__", ())
    if params and get_origin(arg) is not None:
        return arg[tuple(subst.get(p, p) for p in params)]
    return arg


@functools.cache
def response_type_of(request_type: type) -> Any:
    """Return the response type a request class declares, or ``object``."""
    args = declared_type_args(request_type, Request)
    if not args or isinstance(args[0], TypeVar) or getattr(args[0], "__parameters__", ()):
        return object
    return args[0]


def _is_concrete(arg: Any) -> bool:
    return arg is not Any and not isinstance(arg, TypeVar)


_CONTRACTS: tuple[type, ...] = (RequestHandler, NotificationHandler, PipelineBehavior)


def _accepts_handle_call(handle: Callable[..., Any], contract: type) -> bool:
    arity = 3 if contract is PipelineBehavior else 2
    try:
        inspect.signature(handle).bind(*([None] * arity))
    except TypeError:
        return False
    except ValueError:
        # no introspectable signature (some builtins); trust the call
        return True
    return True


def is_compatible(
    instance: object,
    contract: type,
    message_type: type,
    response_type: Any = None,
) -> bool:
    """Check that *instance* can serve *contract* for *message_type*.

    The first declared type argument is the message type and is checked
    contravariantly; the second, when present, must equal *response_type*.

    An instance outside the ABC hierarchy passes when its ``handle`` accepts
    the contract's positional arguments. An instance of a *different*
    contract ABC never passes.
    """
    if not isinstance(instance, contract):
        if isinstance(instance, _CONTRACTS):
            return False
        handle = getattr(instance, "handle", None)
        return callable(handle) and _accepts_handle_call(handle, contract)

    args = declared_type_args(type(instance), contract)
    if not args:
        return True

    declared_message = args[0]
    if (
        _is_concrete(declared_message)
        and isinstance(declared_message, type)
        and not issubclass(message_type, declared_message)
    ):
        return False

    if response_type is not None and len(args) > 1:
        declared_response = args[1]
        if _is_concrete(declared_response) and declared_response != response_type:
            return False
    return True
