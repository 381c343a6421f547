"""
CaseDesk Backend: Sanitizer Unit Tests
======================================

What we test:
    ✅ Script elements are removed together with their content
    ✅ Event handlers and javascript: URLs are stripped
    ✅ Plain text and benign formatting survive
    ✅ Sanitizing twice gives the same result as sanitizing once
    ✅ None passes through
"""

import pytest

from casedesk.services.sanitizer import sanitize


class TestSanitizeStripsActiveMarkup:

    def test_script_removed_text_kept(self):
        result = sanitize("<script>alert(1)</script>hello")
        assert result == "hello"

    def test_event_handler_attribute_removed(self):
        result = sanitize('<img src="x.png" onerror="alert(1)">')
        assert "onerror" not in result
        assert "alert" not in result

    def test_javascript_url_removed(self):
        result = sanitize('<a href="javascript:alert(1)">click</a>')
        assert "javascript:" not in result
        assert "click" in result

    def test_style_block_removed(self):
        result = sanitize("<style>body{display:none}</style>visible")
        assert result == "visible"

    def test_iframe_removed(self):
        result = sanitize('<iframe src="https://evil.example"></iframe>ok')
        assert "iframe" not in result
        assert "ok" in result


class TestSanitizePreservesContent:

    def test_plain_text_unchanged(self):
        text = "Printer on floor 3 jams when duplex is enabled"
        assert sanitize(text) == text

    def test_basic_formatting_kept(self):
        assert sanitize("<b>bold</b> and <i>italic</i>") == "<b>bold</b> and <i>italic</i>"

    def test_none_passes_through(self):
        assert sanitize(None) is None

    def test_empty_string(self):
        assert sanitize("") == ""


class TestSanitizeIdempotence:

    @pytest.mark.parametrize("raw", [
        "<script>alert(1)</script>hello",
        "a < b && c > d",
        '<p onclick="x()">para</p>',
        "Tom & Jerry",
        "<ul><li>one</li><li>two</li></ul>",
    ])
    def test_sanitize_twice_equals_once(self, raw):
        once = sanitize(raw)
        assert sanitize(once) == once
