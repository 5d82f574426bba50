"""Shared test doubles for targets and DrissionPage tabs."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from driver_helper.config import HelperConfig


class FakeTarget:
    """Target double that records every timeout it was polled with.

    Args:
        name: Name reported through name_with_locator.
        present: Always present when True.
        appears_on_call: Becomes present from this (1-based) is_present call on.
        clickable: Accepts click_if_present().
        text: Text reported by has_text().
    """

    def __init__(
        self,
        name: str,
        present: bool = False,
        appears_on_call: int | None = None,
        clickable: bool = False,
        text: str = "",
    ) -> None:
        self.name = name
        self.present = present
        self.appears_on_call = appears_on_call
        self.clickable = clickable
        self.text = text
        self.presence_calls: list[float] = []
        self.click_calls: list[float] = []
        self.clicks = 0

    def __repr__(self) -> str:
        return f"FakeTarget({self.name})"

    @property
    def name_with_locator(self) -> str:
        return f"{self.name} (#{self.name})"

    def is_present(self, timeout: float) -> bool:
        self.presence_calls.append(timeout)
        if self.present:
            return True
        return self.appears_on_call is not None and len(self.presence_calls) >= self.appears_on_call

    def click_if_present(self, timeout: float) -> bool:
        self.click_calls.append(timeout)
        if self.clickable:
            self.clicks += 1
            return True
        return False

    def has_text(self, text: str, timeout: float) -> bool:
        return text in self.text


def make_element(
    *,
    displayed: bool = True,
    text: str = "",
    attrs: dict[str, str] | None = None,
    location: tuple[int, int] = (0, 0),
) -> MagicMock:
    """Build a DrissionPage element double."""
    ele = MagicMock()
    ele.states.is_displayed = displayed
    ele.text = text
    ele.attr.side_effect = lambda name: (attrs or {}).get(name)
    ele.rect.location = location
    return ele


def make_tab(
    elements: dict[str, Any] | None = None,
    *,
    url: str = "https://example.com/",
    title: str = "Example Domain",
) -> MagicMock:
    """Build a DrissionPage tab double.

    Args:
        elements: Mapping of locator to element (or list of elements for eles()).
            Unknown locators resolve to None, like a missing element.
    """
    elements = elements or {}
    tab = MagicMock()
    tab.url = url
    tab.title = title

    def ele(locator: str, index: int = 1, timeout: float | None = None) -> Any:
        found = elements.get(locator)
        if isinstance(found, list):
            return found[index - 1] if 0 < index <= len(found) else None
        return found

    def eles(locator: str, timeout: float | None = None) -> list[Any]:
        found = elements.get(locator)
        if found is None:
            return []
        return found if isinstance(found, list) else [found]

    tab.ele.side_effect = ele
    tab.eles.side_effect = eles
    return tab


def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def fast_config() -> HelperConfig:
    """Configuration with short timeouts for tests that really wait."""
    return HelperConfig(explicit_timeout=0.2, retry_interval=0.01, min_sub_timeout=0.01)
