r"""Cancellable backoff waits.

The wait is always a race between the delay elapsing and the caller's
cancellation event, never a sleep followed by a check of the event.
"""

from __future__ import annotations

__all__ = ["async_wait_before_retry", "wait_before_retry"]

import asyncio
import contextlib
import logging
import time
from typing import TYPE_CHECKING

from aretry.exceptions import RequestCancelledError

if TYPE_CHECKING:
    import threading

logger: logging.Logger = logging.getLogger(__name__)


def wait_before_retry(delay: float, cancel_event: threading.Event | None = None) -> None:
    """Wait before the next attempt unless cancellation is signaled.

    ``threading.Event.wait`` returns the flag of the event, so an event
    set before or during the wait is always observed.

    Args:
        delay: The time to wait in seconds.
        cancel_event: Optional event signaling cancellation.

    Raises:
        RequestCancelledError: If ``cancel_event`` is set before the
            delay elapses.

    Example:
        ```pycon
        >>> import threading
        >>> from aretry.utils.sleep import wait_before_retry
        >>> wait_before_retry(0.0)
        >>> event = threading.Event()
        >>> event.set()
        >>> wait_before_retry(10.0, event)
        Traceback (most recent call last):
            ...
        aretry.exceptions.RequestCancelledError: request cancelled during backoff wait

        ```
    """
    logger.debug(f"Waiting {delay:.2f}s before retry")
    if cancel_event is None:
        time.sleep(delay)
        return
    if cancel_event.wait(delay):
        logger.debug("Backoff wait cancelled")
        msg = "request cancelled during backoff wait"
        raise RequestCancelledError(msg)


async def async_wait_before_retry(delay: float, cancel_event: asyncio.Event | None = None) -> None:
    """Wait asynchronously before the next attempt unless cancellation is
    signaled.

    Cancelling the task running this coroutine raises
    ``asyncio.CancelledError`` as usual.

    Args:
        delay: The time to wait in seconds.
        cancel_event: Optional event signaling cancellation.

    Raises:
        RequestCancelledError: If ``cancel_event`` is set before the
            delay elapses.
    """
    logger.debug(f"Waiting {delay:.2f}s before retry")
    if cancel_event is None:
        await asyncio.sleep(delay)
        return
    if not cancel_event.is_set():
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    if not cancel_event.is_set():
        return
    logger.debug("Backoff wait cancelled")
    msg = "request cancelled during backoff wait"
    raise RequestCancelledError(msg)
