"""Bounded retry primitive shared by query polling and action retries."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

from uiresolve.exceptions import RetryExhaustedError
from uiresolve.logger import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def _accept_truthy(result: object) -> bool:
    return bool(result)


def retry(
    func: Callable[[], T],
    *,
    interval: float,
    timeout: float | None = None,
    attempts: int | None = None,
    until: Callable[[T], bool] = _accept_truthy,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    description: str = "operation",
    on_error: Callable[[int, BaseException], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Call ``func`` until ``until(result)`` holds or the bounds run out.

    ``func`` always runs at least once. The loop stops after ``attempts``
    calls or once ``timeout`` seconds have elapsed, whichever comes first,
    sleeping a fixed ``interval`` between calls. Exceptions listed in
    ``exceptions`` count as a failed attempt and are passed to ``on_error``;
    anything else propagates.

    Raises:
        RetryExhaustedError: When no call succeeded within the bounds.
            ``last_error`` holds the final exception, if the last call raised.
    """
    if timeout is None and attempts is None:
        raise ValueError("retry() needs a timeout, an attempt limit, or both")

    start = clock()
    attempt = 0
    last_error: BaseException | None = None

    while True:
        attempt += 1
        try:
            result = func()
        except exceptions as exc:
            last_error = exc
            log.debug(
                "retry_attempt_failed",
                description=description,
                attempt=attempt,
                error=str(exc)[:200],
            )
            if on_error is not None:
                on_error(attempt, exc)
        else:
            if until(result):
                return result
            last_error = None

        elapsed = clock() - start
        if attempts is not None and attempt >= attempts:
            break
        if timeout is not None and elapsed >= timeout:
            break

        delay = interval
        if timeout is not None:
            delay = min(interval, timeout - elapsed)
        if delay > 0:
            sleep(delay)

    raise RetryExhaustedError(
        description, attempt, clock() - start, last_error
    ) from last_error
