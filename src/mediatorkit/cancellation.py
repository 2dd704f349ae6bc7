"""Cooperative cancellation signal passed through every handler and behavior.

The mediator never creates, polls, or replaces a token. It hands the
caller's token to each behavior and handler; honoring it is their job.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from mediatorkit.errors import OperationCancelledError


class CancellationToken:
    """A one-shot cancellation flag with optional callbacks.

    Usage::

        token = CancellationToken()
        result = await mediator.send(Ping(), token)
        ...
        token.cancel()  # from elsewhere; handlers call token.raise_if_cancelled()
    """

    NONE: ClassVar[CancellationToken]

    def __init__(self, *, cancellable: bool = True) -> None:
        self._cancellable = cancellable
        self._cancelled = False
        self._callbacks: list[Callable[[], object]] = []

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def can_be_cancelled(self) -> bool:
        return self._cancellable

    def cancel(self) -> None:
        """Request cancellation and run registered callbacks once, in order.

        Every callback runs even if an earlier one raises. Failures are
        re-raised together afterwards as an :class:`ExceptionGroup`.
        """
        if not self._cancellable:
            msg = "CancellationToken.NONE cannot be cancelled"
            raise RuntimeError(msg)
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        errors: list[Exception] = []
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:
                errors.append(exc)
        if errors:
            msg = "cancellation callback(s) failed"
            raise ExceptionGroup(msg, errors)

    def register(self, callback: Callable[[], object]) -> None:
        """Run *callback* on cancellation (immediately if already cancelled)."""
        if self._cancelled:
            callback()
        elif self._cancellable:
            self._callbacks.append(callback)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`OperationCancelledError` if cancellation was requested."""
        if self._cancelled:
            msg = "The operation was cancelled."
            raise OperationCancelledError(msg)

    def __repr__(self) -> str:
        if not self._cancellable:
            return "CancellationToken.NONE"
        return f"CancellationToken(cancelled={self._cancelled})"


CancellationToken.NONE = CancellationToken(cancellable=False)
