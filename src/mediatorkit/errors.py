"""Exception taxonomy raised by the dispatch core.

Failures raised by handlers and behaviors themselves are never wrapped:
they reach the caller of ``send``/``publish`` unchanged.
"""

from __future__ import annotations

from typing import get_origin


def qualified_name(tp: object) -> str:
    """Return ``module.QualName`` for a class, or ``repr`` for aliases and the rest."""
    if get_origin(tp) is not None:
        return repr(tp)
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None)
    if qualname is None:
        return repr(tp)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


class MediatorError(Exception):
    """Base class for every error raised by mediatorkit itself."""


class InvalidArgumentError(MediatorError, ValueError):
    """A request or notification was missing at the call boundary."""


class HandlerNotFoundError(MediatorError, LookupError):
    """No handler is registered for a (request type, response type) pair."""

    def __init__(self, request_type: type, response_type: object) -> None:
        self.request_type = request_type
        self.response_type = response_type
        super().__init__(
            f"Handler was not found for request type '{qualified_name(request_type)}' "
            f"with response type '{qualified_name(response_type)}'."
        )


class InvalidConfigurationError(MediatorError, TypeError):
    """The resolver returned something that does not satisfy the required contract.

    Signals a wiring bug in the integrator's resolver, not a transient condition.
    """


class OperationCancelledError(MediatorError):
    """Raised by :meth:`CancellationToken.raise_if_cancelled`."""
