"""Type definitions and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class PollStatus(Enum):
    """How a bounded poll ended."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class PollOutcome:
    """Result of a single bounded poll.

    Attributes:
        status: Whether the condition was met, never met, or failed unexpectedly.
        value: The truthy value the condition produced, if any.
        index: Index of the satisfying target for multi-target polls.
        error: The unexpected exception for ERRORED outcomes.
        attempts: Number of evaluations performed.
        elapsed: Wall time spent polling, in seconds.
    """

    status: PollStatus
    value: Any = None
    index: int | None = None
    error: BaseException | None = None
    attempts: int = 0
    elapsed: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is PollStatus.FOUND


@runtime_checkable
class Target(Protocol):
    """A queryable UI element the poller can check or click."""

    @property
    def name_with_locator(self) -> str: ...

    def is_present(self, timeout: float) -> bool: ...

    def click_if_present(self, timeout: float) -> bool: ...

    def has_text(self, text: str, timeout: float) -> bool: ...
