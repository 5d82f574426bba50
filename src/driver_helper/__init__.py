"""
driver-helper - polling, lookup, navigation and gesture helpers for UI tests.

The core is a bounded poller: every wait re-evaluates a condition on a
fixed interval until it holds or its budget runs out, treating transient
driver errors as "not yet" rather than as failures.
"""

from importlib.metadata import PackageNotFoundError, version

from driver_helper.config import HelperConfig
from driver_helper.element import PageElement
from driver_helper.exceptions import (
    DriverHelperError,
    DriverNotInitializedError,
    ElementAssertionError,
    ElementNotFoundError,
    NavigationError,
    NoElementClickedError,
    NoElementPresentError,
)
from driver_helper.helper import DriverHelper
from driver_helper.messages import Message
from driver_helper.poller import BoundedPoller
from driver_helper.polling import TRANSIENT_ERRORS, RetrySchedule, poll, sub_timeout
from driver_helper.timer import Timer, TimingStats
from driver_helper.types import PollOutcome, PollStatus, Target
from driver_helper.urls import decrypt_by_pattern, is_url_equal, resolve_url

try:
    __version__ = version("driver-helper")
except PackageNotFoundError:
    __version__ = "1.0.0"

__all__ = [
    "DriverHelper",
    "BoundedPoller",
    "HelperConfig",
    "PageElement",
    "Target",
    "PollOutcome",
    "PollStatus",
    "RetrySchedule",
    "TRANSIENT_ERRORS",
    "poll",
    "sub_timeout",
    "Timer",
    "TimingStats",
    "Message",
    "is_url_equal",
    "resolve_url",
    "decrypt_by_pattern",
    "DriverHelperError",
    "DriverNotInitializedError",
    "NoElementPresentError",
    "NoElementClickedError",
    "ElementNotFoundError",
    "ElementAssertionError",
    "NavigationError",
    "__version__",
]
