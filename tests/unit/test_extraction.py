"""Unit tests for JSON recovery from model output.

Run with: pytest tests/unit/test_extraction.py -v
"""

import pytest

from scout.forensics.extraction import extract_json


class TestExtractJson:
    """Tests for extract_json."""

    def test_plain_object(self):
        assert extract_json('{"a":1}') == {"a": 1}

    def test_fenced_block(self):
        """Test a ```json fenced block is unwrapped."""
        assert extract_json('```json\n[{"a":1}]\n```') == [{"a": 1}]

    def test_fenced_block_without_language(self):
        assert extract_json('Result:\n```\n{"ok": true}\n```\nDone.') == {"ok": True}

    def test_prose_around_object(self):
        """Test JSON embedded in prose is found by bracket span."""
        text = 'Sure! Here is the data: {"status": "VERIFIED", "nested": {"x": [1, 2]}} Hope that helps.'

        assert extract_json(text) == {"status": "VERIFIED", "nested": {"x": [1, 2]}}

    def test_prose_around_array(self):
        assert extract_json('Leads: [{"companyName": "Acme"}] (1 result)') == [{"companyName": "Acme"}]

    def test_first_opener_decides_closer(self):
        """Test an array wrapping objects is taken whole."""
        assert extract_json('x [{"a": 1}, {"b": 2}] y') == [{"a": 1}, {"b": 2}]

    def test_not_json(self):
        assert extract_json("not json at all") is None

    def test_broken_json(self):
        """Test truncated output yields None rather than raising."""
        assert extract_json('{"a": 1, "b": [') is None

    @pytest.mark.parametrize("value", [None, "", "   ", 42, b'{"a": 1}'])
    def test_non_text_input(self, value):
        assert extract_json(value) is None

    def test_scalar_json(self):
        """Test bare JSON scalars are returned as parsed."""
        assert extract_json("42") == 42
