"""Tests for CSS Admission utilities."""

import logging
import pytest
from ..utils.error import (
    CSSAdmissionError,
    BufferBuildError,
    ConfigurationError,
    FileOperationError,
    ValidationError,
)
from ..utils.file import safe_read_file, safe_write_file
from ..utils.logging import get_logger

class TestFileUtils:
    """Tests for file helpers."""

    def test_write_and_read(self, tmp_path):
        """Test a write/read cycle into a new directory."""
        path = tmp_path / 'nested' / 'theme.css'
        assert safe_write_file(str(path), '.a{color:red}')
        assert safe_read_file(str(path)) == '.a{color:red}'

    def test_read_too_large(self, tmp_path):
        """Test the size limit on reads."""
        path = tmp_path / 'big.css'
        path.write_text('x' * 100, encoding='utf-8')
        with pytest.raises(FileOperationError):
            safe_read_file(str(path), max_size=10)

    def test_read_missing(self, tmp_path):
        """Test reading a missing file."""
        with pytest.raises(FileOperationError):
            safe_read_file(str(tmp_path / 'missing.css'))

    def test_read_invalid_encoding(self, tmp_path):
        """Test reading a file that is not UTF-8."""
        path = tmp_path / 'latin1.css'
        path.write_bytes(b'.a{content:"\xe9"}')
        with pytest.raises(FileOperationError):
            safe_read_file(str(path))

class TestErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize('error', [
        ValidationError, BufferBuildError, ConfigurationError, FileOperationError,
    ])
    def test_base_class(self, error):
        """Test that every error derives from the package base."""
        assert issubclass(error, CSSAdmissionError)

    def test_buffer_error_is_validation_error(self):
        """Test BufferBuildError placement."""
        assert issubclass(BufferBuildError, ValidationError)

def test_get_logger():
    """Test logger lookup."""
    assert get_logger('css_admission.core') is logging.getLogger('css_admission.core')
