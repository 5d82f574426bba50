"""Just constants."""

from __future__ import annotations

# Config defaults and validation
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
DEFAULT_EXPLICIT_TIMEOUT = 10.0
DEFAULT_RETRY_INTERVAL = 0.1

# Smallest per-attempt slice handed to a target, in seconds
MIN_SUB_TIMEOUT = 1.0

# Fixed attempt counts of the multi-target operations
ALL_PRESENT_ATTEMPTS = 1
LIST_PROBE_ATTEMPTS = 3
ANY_PRESENT_ATTEMPTS = 10

# Timer buckets
WAIT_BUCKET = "WAIT"

# URL handling
CRYPT_PATTERN = r"\{crypt:(?P<payload>[^}]*)\}"
IGNORE_SEGMENT = "{ignore}"
