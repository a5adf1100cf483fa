"""CSS hex-escape decoding for scan buffers.

Decoded text is only ever scanned, never stored or emitted.
"""

import re
import logging
from typing import Callable, Union

from ..utils.config import MAX_DECODE_PASSES
from ..utils.error import BufferBuildError

logger = logging.getLogger(__name__)

ESCAPE_RE = re.compile(r'\\([0-9a-f]{1,6})\s?', re.IGNORECASE | re.ASCII)
QUOTES_AND_SPACE_RE = re.compile(r'["\'\s]+', re.ASCII)
NON_SCAN_CHARS_RE = re.compile(r'[^a-z0-9:]')

Replacement = Union[str, Callable[..., str]]


def safe_sub(pattern: re.Pattern, repl: Replacement, text: str, count: int = 0) -> str:
    """Run ``pattern.sub`` and turn engine failures into BufferBuildError.

    Args:
        pattern: Compiled pattern
        repl: Replacement string or callable
        text: Text to rewrite
        count: Maximum number of replacements (0 for all)

    Returns:
        Rewritten text

    Raises:
        BufferBuildError: If the regex engine fails
    """
    try:
        return pattern.sub(repl, text, count=count)
    except (re.error, RecursionError) as e:
        logger.warning(f"Pattern {pattern.pattern!r} failed: {e}")
        raise BufferBuildError(f"Pattern {pattern.pattern!r} failed: {e}") from e


def _is_printable(code_point: int) -> bool:
    return 0x20 <= code_point <= 0x7E


def _keyword_escape(match) -> str:
    code_point = int(match.group(1), 16)
    return chr(code_point) if _is_printable(code_point) else ''


def _payload_escape(match) -> str:
    digits = match.group(1).lower()
    code_point = int(digits, 16)

    if _is_printable(code_point):
        return chr(code_point)

    # A tokenizer may stop after two digits and read the rest as text.
    if len(digits) > 2:
        lead = int(digits[:2], 16)
        if _is_printable(lead):
            return chr(lead) + digits[2:]

    return ''


def _decode_passes(text: str, replace: Callable, passes: int) -> str:
    decoded = text
    for _ in range(passes):
        candidate = safe_sub(ESCAPE_RE, replace, decoded).lower()
        if candidate == decoded:
            break
        decoded = candidate
    return decoded


def decode_escapes(css: str, passes: int = MAX_DECODE_PASSES) -> str:
    """Lower-case CSS and resolve hex escapes to printable ASCII.

    Escapes outside 0x20-0x7E decode to nothing. Nested escapes are
    resolved by repeated passes, stopping early once a pass changes nothing.

    Args:
        css: CSS with comments removed
        passes: Maximum number of decoding passes

    Returns:
        Decoded, lower-cased CSS
    """
    return _decode_passes(css.lower(), _keyword_escape, passes)


def normalize_scan(text: str) -> str:
    """Drop quotes and whitespace, then keep only ``[a-z0-9:]``."""
    compact = safe_sub(QUOTES_AND_SPACE_RE, '', text)
    if not compact:
        return ''
    return safe_sub(NON_SCAN_CHARS_RE, '', compact)


def decode_url_payload(payload: str, passes: int = MAX_DECODE_PASSES) -> str:
    """Decode and normalize a url() payload for scheme scanning.

    Works like :func:`decode_escapes`, except that a long escape whose
    code point is not printable ASCII may still yield a character from
    its first two hex digits, followed by the remaining digits as text.

    Args:
        payload: Raw text between ``url(`` and ``)``
        passes: Maximum number of decoding passes

    Returns:
        Normalized payload, possibly empty
    """
    decoded = _decode_passes(str(payload).lower(), _payload_escape, passes)
    return normalize_scan(decoded)


__all__ = [
    'safe_sub',
    'decode_escapes',
    'normalize_scan',
    'decode_url_payload',
]
