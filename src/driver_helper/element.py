"""Locator-backed page element used as a poll target."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from driver_helper.constants import DEFAULT_RETRY_INTERVAL
from driver_helper.exceptions import ElementAssertionError, ElementNotFoundError
from driver_helper.polling import RetrySchedule, poll

logger = logging.getLogger(__name__)


class PageElement:
    """A named locator bound to a tab.

    The driver element is looked up again on every check, so a
    PageElement stays valid across page reloads and DOM re-renders.

    Args:
        session: DrissionPage tab (or page) the locator is resolved in.
        locator: DrissionPage locator string, e.g. ``"#login"`` or ``"t:button"``.
        name: Human readable name used in logs and errors. Defaults to the locator.
        index: 1-based index among the elements matching the locator.
        retry_interval: Seconds between two checks while waiting.
        session_provider: Callable returning the tab to use on each lookup.
            When given, it takes precedence over ``session``, so the element
            follows its owner to whichever tab is currently bound.
    """

    def __init__(
        self,
        session: Any,
        locator: str,
        name: str | None = None,
        index: int = 1,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        *,
        session_provider: Callable[[], Any] | None = None,
    ) -> None:
        self._session = session
        self._session_provider = session_provider
        self.locator = locator
        self.name = name or locator
        self.index = index
        self.retry_interval = retry_interval

    def __repr__(self) -> str:
        return f"PageElement({self.name_with_locator})"

    @property
    def session(self) -> Any:
        if self._session_provider is not None:
            return self._session_provider()
        return self._session

    @property
    def name_with_locator(self) -> str:
        if self.index != 1:
            return f"{self.name} ({self.locator} #{self.index})"
        return f"{self.name} ({self.locator})"

    def _lookup(self) -> Any | None:
        ele = self.session.ele(self.locator, index=self.index, timeout=0)
        return ele if ele else None

    def _visible(self) -> Any | None:
        ele = self._lookup()
        if ele is not None and ele.states.is_displayed:
            return ele
        return None

    def _wait(self, probe: Any, timeout: float, description: str) -> Any | None:
        schedule = RetrySchedule.until_deadline(timeout, self.retry_interval)
        outcome = poll(probe, schedule, description=description)
        return outcome.value if outcome.succeeded else None

    def is_present(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for the element to exist and be displayed."""
        return self._wait(self._visible, timeout, f"{self.name_with_locator} is present") is not None

    def is_not_present(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for the element to be gone or hidden."""
        return self._wait(
            lambda: self._visible() is None, timeout, f"{self.name_with_locator} is not present"
        ) is not None

    def has_text(self, text: str, timeout: float) -> bool:
        """Wait for the displayed element to contain ``text``."""

        def probe() -> bool:
            ele = self._visible()
            return ele is not None and text in (ele.text or "")

        return self._wait(probe, timeout, f"{self.name_with_locator} has text '{text}'") is not None

    def click_if_present(self, timeout: float) -> bool:
        """Click the element if it shows up within ``timeout`` seconds.

        Returns:
            True if the element was found and clicked, False otherwise.
        """
        ele = self._wait(self._visible, timeout, f"{self.name_with_locator} is clickable")
        if ele is None:
            return False
        ele.click()
        logger.debug(f"click_if_present: clicked {self.name_with_locator}")
        return True

    def get_element(self, timeout: float = 0) -> Any:
        """Return the underlying driver element.

        Raises:
            ElementNotFoundError: If the element does not exist within ``timeout``.
        """
        ele = self._wait(self._lookup, timeout, f"{self.name_with_locator} exists")
        if ele is None:
            raise ElementNotFoundError(f"Element not found: {self.name_with_locator}")
        return ele

    def attr(self, name: str) -> str | None:
        return self.get_element().attr(name)

    @property
    def text(self) -> str:
        return self.get_element().text

    def assert_present(self, timeout: float) -> None:
        if not self.is_present(timeout):
            raise ElementAssertionError(f"Element is not present: {self.name_with_locator}")

    def assert_has_text(self, text: str, timeout: float) -> None:
        if not self.has_text(text, timeout):
            raise ElementAssertionError(
                f"Element with text '{text}' is not present: {self.name_with_locator}"
            )
