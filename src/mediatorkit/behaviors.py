"""Reusable pipeline behaviors."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog

from mediatorkit.contracts import Continuation, PipelineBehavior, Request

if TYPE_CHECKING:
    from mediatorkit.cancellation import CancellationToken

logger = structlog.get_logger(__name__)


class LoggingBehavior(PipelineBehavior):
    """Log before and after the rest of the pipeline, with elapsed time.

    Registered without type arguments, so it wraps any request type.
    Failures are logged and re-raised unchanged.
    """

    def __init__(self, name: str = "pipeline") -> None:
        self.name = name

    async def handle(
        self,
        request: Request[Any],
        next: Continuation[Any],
        cancellation: CancellationToken,
    ) -> Any:
        request_type = type(request).__name__
        logger.info("mediator.request.before", behavior=self.name, request=request_type)
        start = time.perf_counter()
        try:
            response = await next()
        except Exception as exc:
            logger.warning(
                "mediator.request.failed",
                behavior=self.name,
                request=request_type,
                error=type(exc).__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
            raise
        logger.info(
            "mediator.request.after",
            behavior=self.name,
            request=request_type,
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
        )
        return response
