"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from driver_helper.constants import (
    DEFAULT_EXPLICIT_TIMEOUT,
    DEFAULT_RETRY_INTERVAL,
    MIN_SUB_TIMEOUT,
    VALID_LOG_LEVELS,
)


@dataclass
class HelperConfig:
    """Configuration for DriverHelper and BoundedPoller.

    Attributes:
        explicit_timeout: Default timeout in seconds for waits and lookups (must be > 0).
        short_timeout: Default timeout for the quick "any"/"list" checks.
            If None, a third of explicit_timeout is used.
        retry_interval: Seconds between two evaluations of a wait condition (>= 0).
        min_sub_timeout: Smallest per-attempt timeout handed to a target by the
            multi-target operations, in seconds (must be > 0).
        base_url: Base URL that relative URLs passed to open_url() are resolved against.
        js_gestures: Simulate drag and drop with JavaScript mouse events instead of
            native input actions. Useful for pages that ignore synthesized input.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    explicit_timeout: float = DEFAULT_EXPLICIT_TIMEOUT
    short_timeout: float | None = None
    retry_interval: float = DEFAULT_RETRY_INTERVAL
    min_sub_timeout: float = MIN_SUB_TIMEOUT
    base_url: str | None = None
    js_gestures: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        if self.explicit_timeout <= 0:
            raise ValueError(f"explicit_timeout must be positive, got {self.explicit_timeout}")

        if self.short_timeout is None:
            self.short_timeout = self.explicit_timeout / 3
        elif self.short_timeout <= 0:
            raise ValueError(f"short_timeout must be positive, got {self.short_timeout}")

        if self.retry_interval < 0:
            raise ValueError(f"retry_interval must be non-negative, got {self.retry_interval}")

        if self.min_sub_timeout <= 0:
            raise ValueError(f"min_sub_timeout must be positive, got {self.min_sub_timeout}")

        log_level_upper = self.log_level.upper()
        if log_level_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got '{self.log_level}'")
        # Normalize to uppercase
        self.log_level = log_level_upper

        if self.base_url is not None:
            self._validate_base_url(self.base_url)

    @staticmethod
    def _validate_base_url(base_url: str) -> None:
        """Validate base URL format.

        Args:
            base_url: Base URL to validate.

        Raises:
            ValueError: If the URL is not an absolute http(s) URL.
        """
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"Invalid base_url: '{base_url}'. "
                "Expected an absolute http(s) URL (e.g., 'https://example.com')"
            )
