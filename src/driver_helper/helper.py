"""DriverHelper: polling, lookup, navigation and gesture helpers over a tab."""

from __future__ import annotations

import logging
import re
import threading
import time
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)

from driver_helper.browser import gestures, navigation
from driver_helper.config import HelperConfig
from driver_helper.element import PageElement
from driver_helper.exceptions import DriverNotInitializedError, ElementNotFoundError
from driver_helper.messages import Message
from driver_helper.poller import BoundedPoller
from driver_helper.polling import TRANSIENT_ERRORS
from driver_helper.timer import Timer
from driver_helper.types import PollOutcome, Target
from driver_helper.urls import decrypt_by_pattern, is_url_equal, resolve_url

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DriverHelper:
    """Helper layer for UI tests on top of a DrissionPage tab.

    The helper never launches or closes a browser; it works on the tab it
    is given. Waits follow a bounded retry policy in which transient
    driver errors count as "not yet" instead of failures.

    Example:
        ```python
        from DrissionPage import Chromium
        from driver_helper import DriverHelper, HelperConfig

        tab = Chromium().latest_tab
        helper = DriverHelper(tab, HelperConfig(base_url="https://example.com"))
        helper.open_url("/login")
        helper.click_any(helper.element("#sso"), helper.element("#submit"))
        ```

    Args:
        session: DrissionPage tab to drive. May be bound later via ``session``.
        config: Helper configuration. If None, uses default configuration.
        decryptor: Callable decrypting ``{crypt:...}`` tokens in URLs and titles.
        timer: Sink for wait durations. A private Timer is created if None.
    """

    def __init__(
        self,
        session: Any | None = None,
        config: HelperConfig | None = None,
        *,
        decryptor: Callable[[str], str] | None = None,
        timer: Timer | None = None,
    ) -> None:
        self.config = config or HelperConfig()
        self.decryptor = decryptor
        self.timer = timer or Timer()
        self.poller = BoundedPoller(self.config, self.timer)
        self._session = session

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def session(self) -> Any:
        """The bound tab.

        Raises:
            DriverNotInitializedError: If no tab is bound.
        """
        if self._session is None:
            logger.error(f"There is no initialized driver for thread: {threading.get_ident()}")
            raise DriverNotInitializedError("Driver isn't initialized.")
        return self._session

    @session.setter
    def session(self, session: Any) -> None:
        self._session = session

    def element(self, locator: str, name: str | None = None, index: int = 1) -> PageElement:
        """Build a PageElement that looks itself up in whichever tab is bound.

        The element keeps following the helper after switch_window().

        Raises:
            DriverNotInitializedError: If no tab is bound.
        """
        return PageElement(
            self.session,
            locator,
            name=name,
            index=index,
            retry_interval=self.config.retry_interval,
            session_provider=lambda: self.session,
        )

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def wait_until(
        self, condition: Callable[[Any], Any], timeout: float | None = None
    ) -> bool:
        """Wait until ``condition(tab)`` is truthy. See BoundedPoller.wait_until."""
        return self.poller.wait_until(self.session, condition, timeout)

    def all_elements_present(self, *targets: Target, timeout: float | None = None) -> bool:
        return self.poller.all_elements_present(*targets, timeout=timeout)

    def all_element_lists_are_not_empty(
        self, *lists: Sequence[Target], timeout: float | None = None
    ) -> bool:
        return self.poller.all_element_lists_are_not_empty(*lists, timeout=timeout)

    def is_any_element_present(self, *targets: Target, timeout: float | None = None) -> bool:
        return self.poller.is_any_element_present(*targets, timeout=timeout)

    def any_present_outcome(self, *targets: Target, timeout: float | None = None) -> PollOutcome:
        return self.poller.any_present_outcome(*targets, timeout=timeout)

    def return_any_present_element(self, *targets: Target, timeout: float | None = None) -> Target:
        return self.poller.return_any_present_element(*targets, timeout=timeout)

    def click_any(self, *targets: Target, timeout: float | None = None) -> Target:
        return self.poller.click_any(*targets, timeout=timeout)

    def is_element_with_text_present(
        self, target: Target, text: str, timeout: float | None = None
    ) -> bool:
        if timeout is None:
            timeout = self.config.explicit_timeout
        return target.has_text(text, timeout)

    def is_element_not_present(self, target: PageElement, timeout: float | None = None) -> bool:
        if timeout is None:
            timeout = self.config.explicit_timeout
        return target.is_not_present(timeout)

    def assert_element_present(self, target: PageElement, timeout: float | None = None) -> None:
        if timeout is None:
            timeout = self.config.explicit_timeout
        target.assert_present(timeout)

    def assert_element_with_text_present(
        self, target: PageElement, text: str, timeout: float | None = None
    ) -> None:
        if timeout is None:
            timeout = self.config.explicit_timeout
        target.assert_has_text(text, timeout)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_element(
        self, locator: str, name: str | None = None, timeout: float | None = None
    ) -> PageElement | None:
        """Wait for an element to exist and wrap it.

        Args:
            locator: DrissionPage locator.
            name: Element name for logs. Defaults to the locator.
            timeout: Seconds to wait. Defaults to ``explicit_timeout``.

        Returns:
            PageElement, or None if nothing matched in time.
        """
        name = name or locator
        if not self.wait_until(lambda tab: tab.ele(locator, timeout=0), timeout):
            Message.ELEMENT_NOT_FOUND.error(name)
            return None
        return self.element(locator, name=name)

    def find_elements(self, locator: str, timeout: float | None = None) -> list[PageElement]:
        """Wait for at least one match and wrap every matching element.

        Each element is named after its text, falling back to "undefined".
        """
        if not self.wait_until(lambda tab: tab.ele(locator, timeout=0), timeout):
            Message.ELEMENT_NOT_FOUND.info("undefined")
            return []

        elements = []
        for index, ele in enumerate(self.session.eles(locator, timeout=0), start=1):
            name = "undefined"
            try:
                name = ele.text or name
            except TRANSIENT_ERRORS:
                pass
            elements.append(self.element(locator, name=name, index=index))
        return elements

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _decrypt(self, text: str) -> str:
        return decrypt_by_pattern(text, self.decryptor)

    def open_url(self, url: str) -> None:
        """Open a full or relative URL.

        ``{crypt:...}`` tokens are decrypted and relative URLs are resolved
        against ``config.base_url``. The undecrypted URL is what gets logged.
        """
        target = resolve_url(self._decrypt(url), self.config.base_url)
        Message.OPENING_URL.info(url)
        navigation.open_url(self.session, target)

    def is_url_as_expected(self, expected_url: str) -> bool:
        expected = resolve_url(self._decrypt(expected_url), self.config.base_url)
        actual = self.session.url
        if is_url_equal(expected, actual):
            Message.EXPECTED_URL.info(actual)
            return True
        Message.UNEXPECTED_URL.error(expected_url, actual)
        return False

    def is_title_as_expected(self, expected_title: str, timeout: float | None = None) -> bool:
        """Wait for the page title to contain ``expected_title``."""
        expected = self._decrypt(expected_title)
        tab = self.session
        if self.wait_until(lambda t: expected in (t.title or ""), timeout):
            Message.TITLE_CORRECT.info(tab.url, expected_title)
            return True
        Message.TITLE_NOT_CORRECT.error(tab.url, expected_title, tab.title)
        return False

    def is_title_as_expected_pattern(self, expected_pattern: str) -> bool:
        """Check the current title against a regular expression (search, not full match)."""
        pattern = self._decrypt(expected_pattern)
        tab = self.session
        actual = tab.title or ""
        if re.search(pattern, actual):
            Message.TITLE_CORRECT.info(tab.url, actual)
            return True
        Message.TITLE_DOES_NOT_MATCH_PATTERN.error(tab.url, expected_pattern, actual)
        return False

    def is_page_opened(self, page_url: str, timeout: float | None = None) -> bool:
        """Wait for the current URL to match ``page_url``."""
        expected = resolve_url(page_url, self.config.base_url)
        result = self.wait_until(lambda tab: is_url_equal(expected, tab.url), timeout)
        if not result:
            logger.warning(
                f"Actual URL differs from expected one. Expected '{expected}' "
                f"but found '{self.session.url}'"
            )
        return result

    def navigate_back(self) -> None:
        self.session.back()
        Message.BACK.info()

    def refresh(self, delay: float = 0) -> None:
        """Reload the page, optionally after ``delay`` seconds."""
        if delay:
            self.pause(delay)
        self.session.refresh()
        Message.REFRESH.info()

    def pause(self, seconds: float) -> None:
        time.sleep(seconds)

    def open_tab(self, url: str) -> Any:
        """Open ``url`` in a new tab and return that tab.

        Raises:
            NavigationError: If the browser could not open the tab.
        """
        return navigation.open_tab(self.session, self._decrypt(url))

    def switch_window(self) -> Any:
        """Bind the helper to another open tab and return it.

        Elements built through element() resolve against the new tab from now on.
        """
        self._session = navigation.switch_window(self.session)
        return self._session

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def is_alert_present(self) -> bool:
        return navigation.is_alert_present(self.session)

    def accept_alert(self) -> bool:
        if navigation.handle_alert(self.session, True, self.config.explicit_timeout):
            Message.ALERT_ACCEPTED.info()
            return True
        Message.ALERT_NOT_ACCEPTED.error()
        return False

    def cancel_alert(self) -> bool:
        if navigation.handle_alert(self.session, False, self.config.explicit_timeout):
            Message.ALERT_CANCELED.info()
            return True
        Message.ALERT_NOT_CANCELED.error()
        return False

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def press_tab(self) -> None:
        gestures.press_tab(self.session)

    def drag_and_drop(self, source: PageElement, target: PageElement) -> bool:
        """Drag ``source`` onto ``target`` once both are present.

        Returns:
            True if the gesture was performed.
        """
        timeout = self.config.explicit_timeout
        if not (source.is_present(timeout) and target.is_present(timeout)):
            Message.ELEMENTS_NOT_DRAGGED_AND_DROPPED.error(
                source.name_with_locator, target.name_with_locator
            )
            return False

        if self.config.js_gestures:
            gestures.drag_and_drop_js(self.session, source.get_element(), target.get_element())
        else:
            gestures.drag_and_drop(self.session, source.get_element(), target.get_element())
        Message.ELEMENTS_DRAGGED_AND_DROPPED.info(source.name, target.name)
        return True

    def drag_and_drop_html5(self, source: PageElement, target: PageElement) -> bool:
        """Drag between two elements with HTML5 drag events. Both need an ``id``."""
        try:
            source_id = source.attr("id")
            target_id = target.attr("id")
        except ElementNotFoundError as e:
            logger.debug(f"drag_and_drop_html5: {e}")
            source_id = target_id = None

        if not source_id or not target_id or not gestures.drag_and_drop_html5(
            self.session, source_id, target_id
        ):
            Message.ELEMENTS_NOT_DRAGGED_AND_DROPPED.error(
                source.name_with_locator, target.name_with_locator
            )
            return False

        Message.ELEMENTS_DRAGGED_AND_DROPPED.info(source.name, target.name)
        return True

    def slide(self, slider: PageElement, move_x: int, move_y: int) -> bool:
        if not slider.is_present(self.config.explicit_timeout):
            Message.SLIDER_NOT_MOVED.error(slider.name_with_locator, move_x, move_y)
            return False
        gestures.slide(self.session, slider.get_element(), move_x, move_y)
        Message.SLIDER_MOVED.info(slider.name_with_locator, move_x, move_y)
        return True

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def trigger(self, script: str, *args: Any) -> Any:
        """Run JavaScript in the page; ``args`` are available as ``arguments[i]``."""
        return self.session.run_js(script, *args)

    def perform_ignore_exception(self, action: Callable[[], T]) -> T:
        """Run ``action``, retrying once if the driver connection hiccups."""
        retrying = Retrying(
            stop=stop_after_attempt(2),
            retry=retry_if_exception_type((*TRANSIENT_ERRORS, ConnectionError)),
            before_sleep=before_sleep_log(logger, logging.INFO),
            reraise=True,
        )
        return retrying(action)
