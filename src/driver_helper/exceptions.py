"""Custom exceptions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class DriverHelperError(Exception):
    """Base exception for all errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class DriverNotInitializedError(DriverHelperError):
    """Raised when an operation needs a session and none is bound."""

    pass


class NoElementPresentError(DriverHelperError):
    """Raised when none of the given targets became present."""

    def __init__(self, message: str, targets: Sequence[Any]) -> None:
        self.targets = list(targets)
        super().__init__(message)


class NoElementClickedError(DriverHelperError):
    """Raised when none of the given targets could be clicked."""

    def __init__(self, message: str, targets: Sequence[Any]) -> None:
        self.targets = list(targets)
        super().__init__(message)


class ElementNotFoundError(DriverHelperError):
    """Raised when a required page element cannot be found."""

    pass


class ElementAssertionError(DriverHelperError, AssertionError):
    """Raised by the assert_* helpers when the page does not match."""

    pass


class NavigationError(DriverHelperError):
    """Raised when browser navigation fails."""

    pass
