"""Configuration utility for CSS Admission."""

# Project version
VERSION = "1.0.0"

# Size limits applied to untrusted input
DEFAULT_MAX_BYTES = 10240
DEFAULT_MAX_LINES = 500

# Upper bound for hex-escape decoding passes
MAX_DECODE_PASSES = 5

# Schemes rejected inside url() payloads
DEFAULT_BLOCKED_SCHEMES = ('javascript:', 'vbscript:', 'file:')

# At-rules that may appear in submitted CSS (without the @)
DEFAULT_ALLOWED_AT_RULES = ('media', 'container', 'keyframes', 'supports')

# The only @import target accepted when font imports are enabled
FONT_IMPORT_SCHEME = 'https'
FONT_IMPORT_HOST = 'fonts.googleapis.com'
FONT_IMPORT_PATH_PREFIX = '/css'

# Largest file the CLI will read (in bytes)
MAX_INPUT_FILE_SIZE = 1 * 1024 * 1024   # 1 MB

# Logging
LOG_LEVEL = 'INFO'

# Other settings
ENABLE_COLOR = True

# Exported config
__all__ = [
    'VERSION',
    'DEFAULT_MAX_BYTES', 'DEFAULT_MAX_LINES',
    'MAX_DECODE_PASSES',
    'DEFAULT_BLOCKED_SCHEMES', 'DEFAULT_ALLOWED_AT_RULES',
    'FONT_IMPORT_SCHEME', 'FONT_IMPORT_HOST', 'FONT_IMPORT_PATH_PREFIX',
    'MAX_INPUT_FILE_SIZE',
    'LOG_LEVEL', 'ENABLE_COLOR',
]
