"""Browser navigation, tab and alert utilities."""

from __future__ import annotations

import logging
from typing import Any

from DrissionPage import errors as dp_errors

from driver_helper.exceptions import NavigationError


def open_url(tab: Any, url: str) -> None:
    """Load a URL, accepting an alert that blocks the navigation.

    Args:
        tab: DrissionPage tab instance.
        url: Absolute URL to open.
    """
    logger = logging.getLogger("driver_helper")

    try:
        tab.get(url)
    except dp_errors.AlertExistsError:
        logger.debug("open_url: alert blocks navigation, accepting it")
        tab.handle_alert(accept=True)


def is_alert_present(tab: Any) -> bool:
    """Check whether a JavaScript dialog is currently shown."""
    return bool(tab.states.has_alert)


def handle_alert(tab: Any, accept: bool, timeout: float) -> bool:
    """Wait for an alert and accept or dismiss it.

    Args:
        tab: DrissionPage tab instance.
        accept: True to accept, False to dismiss.
        timeout: Maximum time to wait for the alert.

    Returns:
        True if an alert was handled, False otherwise.
    """
    logger = logging.getLogger("driver_helper")

    try:
        result = tab.handle_alert(accept=accept, timeout=timeout)
    except (RuntimeError, TimeoutError, dp_errors.PageDisconnectedError) as e:
        logger.debug(f"handle_alert: Exception - {e}")
        return False
    return result is not False


def open_tab(tab: Any, url: str) -> Any:
    """Open a URL in a new browser tab.

    Args:
        tab: DrissionPage tab whose browser gets the new tab.
        url: URL to open.

    Returns:
        The new tab.

    Raises:
        NavigationError: If the browser did not open a tab.
    """
    try:
        new_tab = tab.browser.new_tab(url)
    except (RuntimeError, dp_errors.PageDisconnectedError) as e:
        raise NavigationError(f"Unable to open tab for '{url}': {e}") from e
    if new_tab is None:
        raise NavigationError(f"Unable to open tab for '{url}'")
    return new_tab


def switch_window(tab: Any) -> Any:
    """Activate another tab of the same browser.

    With a single tab open, the current tab is returned.

    Args:
        tab: Currently used DrissionPage tab.

    Returns:
        The tab to continue working with.
    """
    browser = tab.browser
    others = [tab_id for tab_id in browser.tab_ids if tab_id != tab.tab_id]
    if not others:
        return tab

    target = browser.get_tab(others[0])
    browser.activate_tab(target)
    return target
