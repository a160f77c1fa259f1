"""
gladiator/core/retry.py

Retry policy for idempotent reads against the data service.

Only reads are wrapped. Writes are never retried, so a transport failure
during an insert surfaces immediately instead of risking a duplicate.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import backoff

from gladiator.core.config import settings
from gladiator.core.exceptions import TransportError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _log_backoff(details: dict[str, Any]) -> None:
    logger.warning(
        f"[RETRY] {details['target'].__name__} failed (try {details['tries']}), "
        f"retrying in {details['wait']:.2f}s"
    )


def _log_giveup(details: dict[str, Any]) -> None:
    logger.error(f"[RETRY] {details['target'].__name__} gave up after {details['tries']} tries")


def retry_idempotent_read(
    max_tries: int = settings.READ_RETRY_ATTEMPTS,
    factor: float = settings.READ_RETRY_FACTOR,
) -> Callable[[F], F]:
    """Retry an async read with exponential backoff when it raises TransportError."""
    return backoff.on_exception(  # type: ignore[no-any-return]
        backoff.expo,
        TransportError,
        max_tries=max_tries,
        factor=factor,
        on_backoff=_log_backoff,
        on_giveup=_log_giveup,
    )
