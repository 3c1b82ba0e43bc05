import asyncio
import logging
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar

T = TypeVar("T")


async def retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    attempts: int = 3,
    base_delay: float = 0.5,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)``, retrying on failure.

    Parameters
    ----------
    func: Callable[..., Awaitable]
        Coroutine function to execute.
    attempts: int
        Maximum number of attempts before the last error is re-raised.
    base_delay: float
        Initial delay in seconds; doubled after every failed attempt.
    exceptions: Tuple[Type[BaseException], ...]
        Exceptions that trigger a retry. Anything else propagates at once.
    logger: logging.Logger | None
        Optional logger for warnings.
    """

    attempts = max(1, attempts)
    delay = base_delay
    for attempt in range(1, attempts + 1):
        try:
            return await func(*args, **kwargs)
        except exceptions as exc:
            if attempt == attempts:
                raise
            if logger:
                logger.warning("Retry %d/%d after error: %s", attempt, attempts, exc)
            if delay > 0:
                await asyncio.sleep(delay)
            delay *= 2
    raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["retry"]
