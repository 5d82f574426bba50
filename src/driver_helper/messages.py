"""Named message templates for helper actions."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger("driver_helper")


class Message(Enum):
    """Log message templates.

    Emitting a message is a side effect only; it never changes what the
    calling operation returns.
    """

    OPENING_URL = "Opening URL '{}'."
    EXPECTED_URL = "Current URL '{}' is as expected."
    UNEXPECTED_URL = "Expected URL '{}' but found '{}'."
    TITLE_CORRECT = "Title of page '{}' is as expected: '{}'."
    TITLE_NOT_CORRECT = "Title of page '{}' is not as expected. Expected: '{}'; actual: '{}'."
    TITLE_DOES_NOT_MATCH_PATTERN = "Title of page '{}' does not match pattern '{}'; actual: '{}'."
    BACK = "Navigated back."
    REFRESH = "Page refreshed."
    ELEMENT_FOUND = "Element '{}' found."
    ELEMENT_NOT_FOUND = "Element '{}' not found."
    ELEMENTS_DRAGGED_AND_DROPPED = "Element '{}' dragged and dropped to '{}'."
    ELEMENTS_NOT_DRAGGED_AND_DROPPED = "Element '{}' was not dragged and dropped to '{}'."
    SLIDER_MOVED = "Slider '{}' moved by x: {}, y: {}."
    SLIDER_NOT_MOVED = "Slider '{}' was not moved by x: {}, y: {}."
    ALERT_ACCEPTED = "Alert accepted."
    ALERT_NOT_ACCEPTED = "Alert was not accepted."
    ALERT_CANCELED = "Alert canceled."
    ALERT_NOT_CANCELED = "Alert was not canceled."

    def format(self, *args: object) -> str:
        return self.value.format(*args)

    def info(self, *args: object) -> str:
        text = self.format(*args)
        logger.info(text)
        return text

    def error(self, *args: object) -> str:
        text = self.format(*args)
        logger.error(text)
        return text
