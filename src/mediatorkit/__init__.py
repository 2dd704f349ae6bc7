"""mediatorkit — in-process request/response and notification dispatch.

Handlers and pipeline behaviors are supplied by a resolver callable;
:class:`Registry` is the built-in one.
"""

from __future__ import annotations

from mediatorkit.behaviors import LoggingBehavior
from mediatorkit.cancellation import CancellationToken
from mediatorkit.contracts import (
    Continuation,
    Notification,
    NotificationHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
)
from mediatorkit.errors import (
    HandlerNotFoundError,
    InvalidArgumentError,
    InvalidConfigurationError,
    MediatorError,
    OperationCancelledError,
)
from mediatorkit.mediator import Mediator
from mediatorkit.resolver import (
    BehaviorsDescriptor,
    HandlerDescriptor,
    NotificationHandlersDescriptor,
    Registry,
    Resolver,
    ServiceDescriptor,
)

__version__ = "0.1.0"

__all__ = [
    "BehaviorsDescriptor",
    "CancellationToken",
    "Continuation",
    "HandlerDescriptor",
    "HandlerNotFoundError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "LoggingBehavior",
    "Mediator",
    "MediatorError",
    "Notification",
    "NotificationHandler",
    "NotificationHandlersDescriptor",
    "OperationCancelledError",
    "PipelineBehavior",
    "Registry",
    "Request",
    "RequestHandler",
    "Resolver",
    "ServiceDescriptor",
    "__version__",
]
