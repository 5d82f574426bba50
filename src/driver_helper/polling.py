"""Bounded retry engine shared by every wait in the package.

A poll evaluates a probe until it returns a truthy value or its
:class:`RetrySchedule` is exhausted. Schedules are bounded either by a
deadline (``timeout``), by a number of attempts, or by both.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from DrissionPage import errors as dp_errors
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    stop_any,
    wait_fixed,
)
from tenacity.stop import stop_base

from driver_helper.constants import MIN_SUB_TIMEOUT
from driver_helper.types import PollOutcome, PollStatus

logger = logging.getLogger(__name__)

# Driver failures that mean "not satisfied yet" rather than a hard error:
# missing element, stale reference or session, protocol timeout, blocking alert.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    dp_errors.ElementNotFoundError,
    dp_errors.ElementLostError,
    dp_errors.WaitTimeoutError,
    dp_errors.PageDisconnectedError,
    dp_errors.ContextLostError,
    dp_errors.AlertExistsError,
    TimeoutError,
)


def is_transient(exc: BaseException) -> bool:
    """Return True if the error belongs to the transient driver error set."""
    return isinstance(exc, TRANSIENT_ERRORS)


@dataclass(frozen=True, slots=True)
class RetrySchedule:
    """When to re-evaluate a probe and when to give up.

    Attributes:
        interval: Seconds to sleep between two attempts.
        timeout: Give up once this many seconds have elapsed (checked after each attempt).
        attempts: Give up after this many attempts.
    """

    interval: float = 0.0
    timeout: float | None = None
    attempts: int | None = None

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError(f"interval must be non-negative, got {self.interval}")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {self.timeout}")
        if self.attempts is not None and self.attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {self.attempts}")
        if self.timeout is None and self.attempts is None:
            raise ValueError("a schedule needs a timeout, an attempt count, or both")

    @classmethod
    def until_deadline(cls, timeout: float, interval: float) -> RetrySchedule:
        return cls(interval=interval, timeout=timeout)

    @classmethod
    def fixed_attempts(cls, attempts: int, interval: float = 0.0) -> RetrySchedule:
        return cls(interval=interval, attempts=attempts)

    def stop_condition(self) -> stop_base:
        conditions: list[stop_base] = []
        if self.timeout is not None:
            conditions.append(stop_after_delay(self.timeout))
        if self.attempts is not None:
            conditions.append(stop_after_attempt(self.attempts))
        if len(conditions) == 1:
            return conditions[0]
        return stop_any(*conditions)


def sub_timeout(timeout: float, attempts: int, floor: float = MIN_SUB_TIMEOUT) -> float:
    """Split a total timeout evenly across attempts.

    The slice is clamped up to ``floor`` so a zero or tiny budget still
    gives every attempt a real wait instead of a busy loop.

    Args:
        timeout: Total budget in seconds.
        attempts: Number of attempts sharing the budget.
        floor: Minimum slice in seconds.

    Returns:
        Per-attempt timeout in seconds.
    """
    if timeout < 0:
        raise ValueError(f"timeout must be non-negative, got {timeout}")
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")
    return max(floor, timeout / attempts)


def _unsatisfied(value: Any) -> bool:
    return not value


def _give_up(retry_state: RetryCallState) -> None:
    return None


def poll(
    probe: Callable[[], Any],
    schedule: RetrySchedule,
    *,
    description: str = "condition",
    sleep: Callable[[float], None] = time.sleep,
) -> PollOutcome:
    """Evaluate ``probe`` until it returns a truthy value or the schedule runs out.

    Transient driver errors raised by the probe count as an unsatisfied
    attempt. Any other exception stops polling immediately and is reported
    as an ERRORED outcome; it is logged here, never raised.

    Args:
        probe: Zero-argument callable; a truthy return value ends the poll.
        schedule: Interval and bounds of the poll.
        description: Human readable name of the condition, used in log lines.
        sleep: Sleep function used between attempts.

    Returns:
        PollOutcome with status FOUND (value set), NOT_FOUND or ERRORED (error set).
    """
    attempts = 0

    def attempt() -> Any:
        nonlocal attempts
        attempts += 1
        try:
            return probe()
        except Exception as e:
            if is_transient(e):
                logger.debug(f"poll: {description} - transient {type(e).__name__}: {e}")
                return None
            raise

    retrying = Retrying(
        stop=schedule.stop_condition(),
        wait=wait_fixed(schedule.interval),
        retry=retry_if_result(_unsatisfied),
        retry_error_callback=_give_up,
        sleep=sleep,
    )

    start = time.monotonic()
    try:
        value = retrying(attempt)
    except Exception as e:
        elapsed = time.monotonic() - start
        logger.error(f"poll: {description} - unexpected error", exc_info=True)
        return PollOutcome(PollStatus.ERRORED, error=e, attempts=attempts, elapsed=elapsed)
    elapsed = time.monotonic() - start

    if _unsatisfied(value):
        logger.debug(f"poll: {description} - not satisfied after {attempts} attempt(s)")
        return PollOutcome(PollStatus.NOT_FOUND, attempts=attempts, elapsed=elapsed)

    return PollOutcome(PollStatus.FOUND, value=value, attempts=attempts, elapsed=elapsed)
