"""URL comparison, resolution and encrypted-token helpers."""

from __future__ import annotations

import re
from collections.abc import Callable
from urllib.parse import urlparse

from driver_helper.constants import CRYPT_PATTERN, IGNORE_SEGMENT

_CRYPT_RE = re.compile(CRYPT_PATTERN)


def _normalize(url: str) -> list[str]:
    parsed = urlparse(url if "://" in url else f"//{url}")
    path = parsed.path.rstrip("/")
    return [parsed.netloc.lower(), *path.split("/")[1:]] if path else [parsed.netloc.lower()]


def is_url_equal(expected: str, actual: str) -> bool:
    """Compare two URLs the way a page check needs.

    Scheme, query string, fragment and a trailing slash are ignored. A path
    segment spelled ``{ignore}`` in either URL matches any segment.

    Args:
        expected: Expected URL, possibly containing ``{ignore}`` segments.
        actual: URL reported by the browser.

    Returns:
        True if the URLs match segment by segment.
    """
    expected_parts = _normalize(expected)
    actual_parts = _normalize(actual)
    if len(expected_parts) != len(actual_parts):
        return False

    for left, right in zip(expected_parts, actual_parts):
        if IGNORE_SEGMENT in (left, right):
            continue
        if left != right:
            return False
    return True


def resolve_url(url: str, base_url: str | None) -> str:
    """Prefix a relative URL with ``base_url``.

    URLs that already carry an http(s) scheme are returned unchanged.
    """
    if url.startswith(("http:", "https:")) or not base_url:
        return url
    if base_url.endswith("/") and url.startswith("/"):
        return base_url + url[1:]
    return base_url + url


def decrypt_by_pattern(text: str, decryptor: Callable[[str], str] | None) -> str:
    """Replace every ``{crypt:...}`` token in ``text`` with its decrypted value.

    Args:
        text: Text that may contain encrypted tokens.
        decryptor: Callable turning a token payload into plain text. If None,
            the text is returned unchanged.

    Returns:
        The text with all tokens decrypted.
    """
    if decryptor is None:
        return text
    return _CRYPT_RE.sub(lambda m: decryptor(m.group("payload")), text)
