"""@import matching and the Google Fonts import allowlist."""

import re
from typing import List
from urllib.parse import urlsplit

from ..utils.config import (
    FONT_IMPORT_SCHEME,
    FONT_IMPORT_HOST,
    FONT_IMPORT_PATH_PREFIX,
)
from .decoder import safe_sub

IMPORT_RE = re.compile(
    r'@import\s+(?:url\s*\(\s*)?'
    r'(?:"([^"]+)"|\'([^\']+)\'|([^"\')\s]+))'
    r'\s*\)?\s*;',
    re.IGNORECASE | re.ASCII
)
IMPORT_TOKEN_RE = re.compile(r'@import', re.IGNORECASE)


def has_import(css: str) -> bool:
    """Whether anything that looks like ``@import`` is present."""
    return IMPORT_TOKEN_RE.search(css) is not None


def find_import_targets(css: str) -> List[str]:
    """Return the target of every well-formed ``@import`` statement.

    Args:
        css: CSS with comments removed

    Returns:
        Targets in source order, quotes and ``url()`` removed
    """
    return [
        (match.group(1) or match.group(2) or match.group(3) or '').strip()
        for match in IMPORT_RE.finditer(css)
    ]


def strip_imports(css: str) -> str:
    """Remove every well-formed ``@import`` statement."""
    return safe_sub(IMPORT_RE, '', css)


def is_font_import(url: str) -> bool:
    """Check an import target against the Google Fonts CSS allowlist.

    Args:
        url: Import target

    Returns:
        True for ``https://fonts.googleapis.com/css...`` targets
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False

    return (
        parts.scheme.lower() == FONT_IMPORT_SCHEME
        and (parts.hostname or '') == FONT_IMPORT_HOST
        and parts.path.startswith(FONT_IMPORT_PATH_PREFIX)
    )


__all__ = ['IMPORT_RE', 'has_import', 'find_import_targets', 'strip_imports', 'is_font_import']
