"""
Ordered fallback chains.

An attempt is a zero-argument coroutine factory that returns a value or None.
Attempts run strictly in order; the first non-None result wins. Exceptions
are logged and treated like None, so the chain only ever ends in the static
fallback.
"""
import logging
from typing import Awaitable, Callable, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Attempt = Tuple[str, Callable[[], Awaitable[Optional[T]]]]


async def first_success(
    attempts: Sequence[Attempt],
    fallback: Callable[[], T],
) -> T:
    """
    Evaluate labelled attempts in order and return the first usable result.

    Args:
        attempts: (label, coroutine factory) pairs
        fallback: Called when every attempt fails; must not raise

    Returns:
        The first non-None attempt result, else fallback()
    """
    for label, attempt in attempts:
        try:
            result = await attempt()
        except Exception as e:
            logger.warning(f"{label} failed: {e}")
            continue
        if result is not None:
            logger.info(f"{label} succeeded")
            return result
        logger.warning(f"{label} returned no result")
    logger.warning("All attempts failed, using static fallback")
    return fallback()
