"""Pytest configuration for CSS Admission tests."""

import logging
import pytest

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

@pytest.fixture(scope='session')
def sample_css():
    """Return a harmless theme stylesheet."""
    return """
    body {
        color: #333;
        font-family: "Helvetica Neue", Arial, sans-serif;
        margin: 0;
    }

    .container {
        max-width: 1200px;
        margin: 0 auto;
    }

    /* Small screens */
    @media (max-width: 768px) {
        .container {
            padding: 0 16px;
        }
    }

    @keyframes fade {
        from { opacity: 0; }
        to { opacity: 1; }
    }
    """

@pytest.fixture(scope='session')
def font_import():
    """Return an allowed Google Fonts import statement."""
    return '@import url("https://fonts.googleapis.com/css2?family=Roboto");'

@pytest.fixture(scope='session')
def hostile_css():
    """Return inputs that the standard chain must reject, keyed by reason."""
    return {
        'html_open': '.a{color:red}</style><script>alert(1)</script>',
        'danger_token': '.a{width:\\65 xpression(alert(1))}',
        'import': '@import "foo.css";\n.a{color:red}',
        'url': '.a{background:url(image.png)}',
        'at_rule': '@font-face{font-family:x}',
        'braces': '.a{color:red',
    }

@pytest.fixture
def css_file(tmp_path):
    """Write CSS to a temporary file and return its path."""
    def _write(content, name='theme.css'):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
