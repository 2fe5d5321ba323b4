"""
Tests for HTML escaping of headline text.
"""

import pytest

from newsticker.common.text_helper import escape_html


class TestEscapeHtml:
    """Test escape_html."""

    @pytest.mark.parametrize("text,expected", [
        ('plain', 'plain'),
        ('<script>alert(1)</script>', '&lt;script&gt;alert(1)&lt;/script&gt;'),
        ('Q&A', 'Q&amp;A'),
        ('"quoted" \'single\'', '&quot;quoted&quot; &#x27;single&#x27;'),
        ('&lt;', '&amp;lt;'),
        (None, ''),
        (42, '42'),
    ])
    def test_escape(self, text, expected):
        assert escape_html(text) == expected
