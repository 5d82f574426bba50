"""Bounded poller: condition waits and any/all checks over several targets."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from driver_helper.config import HelperConfig
from driver_helper.constants import (
    ALL_PRESENT_ATTEMPTS,
    ANY_PRESENT_ATTEMPTS,
    LIST_PROBE_ATTEMPTS,
    WAIT_BUCKET,
)
from driver_helper.exceptions import (
    DriverNotInitializedError,
    NoElementClickedError,
    NoElementPresentError,
)
from driver_helper.polling import RetrySchedule, is_transient, poll, sub_timeout
from driver_helper.timer import Timer
from driver_helper.types import PollOutcome, PollStatus, Target

logger = logging.getLogger(__name__)


def _describe(targets: Sequence[Any]) -> str:
    return "[" + ", ".join(getattr(t, "name_with_locator", repr(t)) for t in targets) + "]"


class BoundedPoller:
    """Stateless retry engine over a session and caller supplied targets.

    Every call is independent; the poller keeps only its configuration
    and the timer sink, so one instance can serve several threads as long
    as each thread passes its own session and targets.

    Args:
        config: Timeouts and retry interval. If None, uses default configuration.
        timer: Sink receiving the duration of every wait_until() call.
        sleep: Sleep function used between attempts.
    """

    def __init__(
        self,
        config: HelperConfig | None = None,
        timer: Timer | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or HelperConfig()
        self.timer = timer or Timer()
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Core primitive
    # ------------------------------------------------------------------

    def wait_until(
        self,
        session: Any,
        condition: Callable[[Any], Any],
        timeout: float | None = None,
        description: str | None = None,
    ) -> bool:
        """Wait until ``condition(session)`` returns a truthy value.

        The condition is re-evaluated every ``retry_interval`` seconds.
        Transient driver errors are treated as "not yet"; unexpected errors
        raised by the condition are logged and end the wait with False.

        Args:
            session: Session handle passed to the condition.
            condition: Callable taking the session.
            timeout: Seconds to wait. Defaults to ``explicit_timeout``.
            description: Name of the condition for log lines.

        Returns:
            True if the condition was met in time, False otherwise.

        Raises:
            DriverNotInitializedError: If ``session`` is None.
            ValueError: If ``timeout`` is negative.
        """
        if session is None:
            logger.error("wait_until: no session to poll")
            raise DriverNotInitializedError("Driver isn't initialized.")
        if timeout is None:
            timeout = self.config.explicit_timeout
        description = description or getattr(condition, "__name__", "condition")
        schedule = RetrySchedule.until_deadline(timeout, self.config.retry_interval)

        self.timer.start(WAIT_BUCKET)
        try:
            outcome = poll(
                lambda: condition(session),
                schedule,
                description=description,
                sleep=self._sleep,
            )
        finally:
            self.timer.stop(WAIT_BUCKET)

        if outcome.succeeded:
            logger.debug(f"wait_until: {description} - finished true")
        return outcome.succeeded

    # ------------------------------------------------------------------
    # AND semantics
    # ------------------------------------------------------------------

    def all_elements_present(self, *targets: Target, timeout: float | None = None) -> bool:
        """Check that every target is present, each checked once.

        Args:
            *targets: Targets to check.
            timeout: Total budget in seconds. Defaults to ``explicit_timeout``.

        Returns:
            True only if all targets are present. Every absent target is logged.
        """
        if timeout is None:
            timeout = self.config.explicit_timeout
        per_target = sub_timeout(timeout, ALL_PRESENT_ATTEMPTS, self.config.min_sub_timeout)

        result = True
        for target in targets:
            if not target.is_present(per_target):
                logger.error(f"{target.name_with_locator} is not present.")
                result = False
        return result

    def all_element_lists_are_not_empty(
        self, *lists: Sequence[Target], timeout: float | None = None
    ) -> bool:
        """Check that every list holds at least one element.

        The first element of each list is probed for presence up to three
        times, which gives lazily rendered lists time to appear; the
        verdict itself is the list being non-empty.

        Args:
            *lists: Lists of targets.
            timeout: Total budget in seconds. Defaults to ``short_timeout``.

        Returns:
            False as soon as an empty list is met, True otherwise.
        """
        if timeout is None:
            timeout = self.config.short_timeout
        per_attempt = sub_timeout(timeout, LIST_PROBE_ATTEMPTS, self.config.min_sub_timeout)

        for i, elements in enumerate(lists):
            if elements:
                first = elements[0]
                poll(
                    lambda: first.is_present(per_attempt),
                    RetrySchedule.fixed_attempts(LIST_PROBE_ATTEMPTS),
                    description=f"first element of list [{i}] is present",
                    sleep=self._sleep,
                )
            if len(elements) == 0:
                logger.error(f"List of elements[{i}] from elements {list(lists)} is empty.")
                return False
        return True

    # ------------------------------------------------------------------
    # OR semantics
    # ------------------------------------------------------------------

    def _first_in_rounds(
        self,
        targets: Sequence[Target],
        check: Callable[[Target, float], bool],
        timeout: float,
        description: str,
    ) -> PollOutcome:
        per_target = sub_timeout(timeout, ANY_PRESENT_ATTEMPTS, self.config.min_sub_timeout)

        def one_round() -> tuple[int, Target] | None:
            for index, target in enumerate(targets):
                # A failing target only loses this round; the others are still checked.
                try:
                    satisfied = check(target, per_target)
                except Exception as e:
                    if is_transient(e):
                        logger.debug(
                            f"{description}: {target.name_with_locator} - "
                            f"transient {type(e).__name__}: {e}"
                        )
                    else:
                        logger.error(
                            f"{description}: {target.name_with_locator} - unexpected error",
                            exc_info=True,
                        )
                    continue
                if satisfied:
                    return index, target
            return None

        outcome = poll(
            one_round,
            RetrySchedule.fixed_attempts(ANY_PRESENT_ATTEMPTS),
            description=description,
            sleep=self._sleep,
        )
        if not outcome.succeeded:
            return outcome

        index, target = outcome.value
        return PollOutcome(
            PollStatus.FOUND,
            value=target,
            index=index,
            attempts=outcome.attempts,
            elapsed=outcome.elapsed,
        )

    def any_present_outcome(self, *targets: Target, timeout: float | None = None) -> PollOutcome:
        """Poll the targets round by round and report which one showed up first.

        Each of the ten rounds walks the targets left to right; the first
        target found present wins.

        Args:
            *targets: Candidate targets in priority order.
            timeout: Total budget in seconds. Defaults to ``short_timeout``.

        Returns:
            PollOutcome whose ``value`` and ``index`` identify the winning target.
        """
        if timeout is None:
            timeout = self.config.short_timeout
        outcome = self._first_in_rounds(
            targets,
            lambda target, t: target.is_present(t),
            timeout,
            f"any of {_describe(targets)} is present",
        )
        if outcome.succeeded:
            logger.debug(f"{outcome.value.name_with_locator} is present")
        return outcome

    def is_any_element_present(self, *targets: Target, timeout: float | None = None) -> bool:
        """Return True if any target becomes present within the budget."""
        outcome = self.any_present_outcome(*targets, timeout=timeout)
        if not outcome.succeeded:
            logger.error(f"Unable to find any element from array: {_describe(targets)}")
        return outcome.succeeded

    def return_any_present_element(self, *targets: Target, timeout: float | None = None) -> Target:
        """Return the first target that becomes present.

        Raises:
            NoElementPresentError: If no target was present in any round.
        """
        outcome = self.any_present_outcome(*targets, timeout=timeout)
        if not outcome.succeeded:
            logger.error("All elements are not present")
            raise NoElementPresentError(
                f"Unable to find any element from array: {_describe(targets)}", targets
            )
        return outcome.value

    def click_any(self, *targets: Target, timeout: float | None = None) -> Target:
        """Click the first target that accepts a click.

        Args:
            *targets: Candidate targets in priority order.
            timeout: Total budget in seconds. Defaults to ``explicit_timeout``.

        Returns:
            The target that was clicked.

        Raises:
            NoElementClickedError: If no target could be clicked in any round.
        """
        if timeout is None:
            timeout = self.config.explicit_timeout
        outcome = self._first_in_rounds(
            targets,
            lambda target, t: target.click_if_present(t),
            timeout,
            f"any of {_describe(targets)} is clickable",
        )
        if not outcome.succeeded:
            raise NoElementClickedError(
                f"Unable to click onto any elements from array: {_describe(targets)}", targets
            )
        return outcome.value
