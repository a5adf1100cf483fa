"""Tests for input sanitization and scan buffers."""

import time

import pytest
from ..core.buffers import ScanBuffers, sanitize_input, build_buffers, strip_comments, strip_strings
from ..core.reasons import Rejection
from ..utils.error import BufferBuildError

class TestSanitizeInput:
    """Tests for the pre-stage."""

    def test_strips_bom_and_control_chars(self):
        """Test BOM and control character removal."""
        raw, rejection = sanitize_input('\ufeff .a{\x00color:red\x07} \n')
        assert raw == '.a{color:red}'
        assert rejection is None

    def test_blank_input(self):
        """Test that whitespace-only input becomes empty."""
        assert sanitize_input('  \n\t ') == ('', None)

    @pytest.mark.parametrize('css', [
        '@charset "UTF-8";\n.a{color:red}',
        "@charset 'utf-8';.a{color:red}",
        '@CHARSET utf-8 ;.a{color:red}',
    ])
    def test_valid_charset(self, css):
        """Test accepted @charset declarations."""
        raw, rejection = sanitize_input(css)
        assert raw == css
        assert rejection is None

    @pytest.mark.parametrize('css, expected', [
        ('.a{color:red}\n@charset "utf-8";', Rejection.CHARSET_PLACEMENT),
        ('/* x */@charset "utf-8";.a{}', Rejection.CHARSET_PLACEMENT),
        ('@charset "latin1";.a{}', Rejection.CHARSET_VALUE),
        ('@charset "utf-8" .a{}', Rejection.CHARSET_VALUE),
        ('@charset "utf-8"; @charset "utf-8";', Rejection.CHARSET_DUPLICATE),
    ])
    def test_invalid_charset(self, css, expected):
        """Test rejected @charset declarations."""
        assert sanitize_input(css) == ('', expected)

class TestBuildBuffers:
    """Tests for derived scan buffers."""

    def test_empty(self):
        """Test that empty input builds empty buffers."""
        assert build_buffers('') == ScanBuffers()

    def test_comments_and_charset_removed(self):
        """Test the comment-free buffer."""
        buffers = build_buffers('@charset "utf-8";\n/* a */.a{color:red}/* b\n c */')
        assert buffers.no_comments == '.a{color:red}'
        assert buffers.raw.startswith('@charset')

    def test_strings_removed(self):
        """Test the string-free buffer."""
        buffers = build_buffers('.a{content:"x<y"}.b{content:\'it\\\'s\'}')
        assert buffers.no_strings == '.a{content:}.b{content:}'

    def test_decoded_and_normalized(self):
        """Test the decoded and normalized buffers."""
        buffers = build_buffers('.A { color: "\\52 ed" }')
        assert buffers.decoded == '.a { color: "red" }'
        assert buffers.normalized == 'acolor:red'

    def test_string_only_input_fails_closed(self):
        """Test that a buffer emptied by string stripping is an error."""
        with pytest.raises(BufferBuildError):
            build_buffers('"' + 'a' * 10000 + '"')

    def test_comment_only_input(self):
        """Test that comment-only input is not an error."""
        buffers = build_buffers('/* nothing */')
        assert buffers.no_comments == ''
        assert buffers.no_strings == ''

def test_strip_strings_respects_escapes():
    """Test that escaped quotes do not end a string."""
    assert strip_strings('a"b\\"c"d') == 'ad'

class TestStripStrings:
    """Tests for string and comment removal."""

    def test_escaped_quote_outside_string(self):
        """Test that an escaped quote is text, not the start of a string."""
        assert strip_strings('.a{b:\\"}@x{}.c{d:"}') == '.a{b:\\"}@x{}.c{d:"}'
        assert strip_strings('\\\'a\'b\'') == '\\\'a'

    def test_unclosed_quote_kept(self):
        """Test that a quote without a partner stays in the text."""
        assert strip_strings('.a{b:"x}') == '.a{b:"x}'
        assert strip_strings('"a\'b\'c') == '"ac'

    def test_trailing_backslash(self):
        """Test a backslash at the very end of input."""
        assert strip_strings('.a{}\\') == '.a{}\\'
        assert strip_strings('.a{}"b\\') == '.a{}"b\\'

    def test_comments(self):
        """Test comment removal, including an unterminated one."""
        assert strip_comments('a/* x */b/**/c') == 'abc'
        assert strip_comments('a/*/b*/c') == 'ac'
        assert strip_comments('a/* x */b/* y') == 'ab/* y'

    @pytest.mark.parametrize('css', [
        '"\\' + '"\\' * 100000,
        "'\\" * 100000,
        '/*a' * 100000,
    ])
    def test_unclosed_runs_are_fast(self, css):
        """Test that long runs of unclosed quotes or comments scan quickly."""
        start = time.monotonic()
        build_buffers(css)
        assert time.monotonic() - start < 5
