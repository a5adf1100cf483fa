"""Rejection taxonomy for CSS admission."""

from enum import Enum


class AdmissionState(Enum):
    """Verdict of a validator instance."""

    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


# Categories
MALFORMED_CHARSET = 'malformed-charset'
TOOLING_FAILURE = 'tooling-failure'
SIZE_EXCEEDED = 'size-exceeded'
STRUCTURAL = 'structural'
DANGEROUS_CONSTRUCT = 'dangerous-construct'
UNALLOWED_IMPORT = 'unallowed-import'


class Rejection(Enum):
    """Reason a submitted stylesheet was rejected.

    Each member holds its category and the CSS comment handed back to the
    caller in place of the stylesheet.
    """

    CHARSET_PLACEMENT = (MALFORMED_CHARSET, 'invalid @charset placement')
    CHARSET_VALUE = (MALFORMED_CHARSET, 'invalid @charset value')
    CHARSET_DUPLICATE = (MALFORMED_CHARSET, 'duplicate @charset')
    REGEX_ERROR = (TOOLING_FAILURE, 'regex error')
    SIZE = (SIZE_EXCEEDED, 'size')
    LINES = (SIZE_EXCEEDED, 'too many lines')
    HTML_OPEN = (STRUCTURAL, 'HTML opening character')
    BRACES = (STRUCTURAL, 'mismatched opening/closing braces')
    DANGER_TOKEN = (DANGEROUS_CONSTRUCT, 'dangerous expression or property')
    URL = (DANGEROUS_CONSTRUCT, 'use of url()')
    URL_SCHEME = (DANGEROUS_CONSTRUCT, 'dangerous scheme inside url()')
    AT_RULE = (DANGEROUS_CONSTRUCT, 'unallowed @-rule')
    IMPORT = (UNALLOWED_IMPORT, 'unallowed @import')

    def __init__(self, category: str, cause: str):
        self.category = category
        self.cause = cause

    @property
    def placeholder(self) -> str:
        return f'/* Rejected due to {self.cause}. */'


__all__ = [
    'AdmissionState',
    'Rejection',
    'MALFORMED_CHARSET',
    'TOOLING_FAILURE',
    'SIZE_EXCEEDED',
    'STRUCTURAL',
    'DANGEROUS_CONSTRUCT',
    'UNALLOWED_IMPORT',
]
