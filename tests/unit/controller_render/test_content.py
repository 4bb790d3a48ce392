"""Tests for the per-request content accumulator."""

import pytest

from controller_render.content import FOR_LAYOUT, LAYOUT, ContentAccumulator
from controller_render.exceptions import InvalidArgumentException


class TestPull:
    """Tests for reading content back."""

    def test_pull_unset_key_returns_none(self):
        """Test reading a key that was never pushed is not an error."""
        content = ContentAccumulator()

        assert content.pull("sidebar") is None
        assert content.pull() is None

    def test_pull_defaults_to_layout_key(self):
        """Test pull with no key reads the layout key."""
        content = ContentAccumulator()
        content.push(LAYOUT, "body")

        assert content.pull() == "body"

    def test_pull_has_no_side_effect(self):
        """Test pulling twice returns the same content."""
        content = ContentAccumulator()
        content.push(FOR_LAYOUT, "x")

        assert content.pull(FOR_LAYOUT) == "x"
        assert content.pull(FOR_LAYOUT) == "x"


class TestPush:
    """Tests for storing content."""

    def test_push_concatenates_in_order(self):
        """Test successive pushes are concatenated in push order."""
        content = ContentAccumulator()
        content.push("head", "a")
        content.push("head", "b")

        assert content.pull("head") == "ab"

    def test_push_coerces_text_to_string(self):
        """Test non-string text is stored as its string form."""
        content = ContentAccumulator()
        content.push("count", 42)

        assert content.pull("count") == "42"

    def test_push_decodes_bytes(self):
        """Test bytes from text or a producer are decoded as UTF-8."""
        content = ContentAccumulator()
        content.push("k", b"caf\xc3\xa9 ", producer=lambda: b'{"id": 1}')

        assert content.pull("k") == 'caf\u00e9 {"id": 1}'

    def test_push_returns_stored_value(self):
        """Test push returns the full content now stored."""
        content = ContentAccumulator()
        content.push("k", "one")

        assert content.push("k", "two") == "onetwo"

    def test_push_with_producer(self):
        """Test producer output is appended after text."""
        content = ContentAccumulator()
        content.push("k", "text-", producer=lambda: "produced")

        assert content.pull("k") == "text-produced"

    def test_push_producer_only(self):
        """Test a producer alone is enough."""
        content = ContentAccumulator()
        content.push("k", producer=lambda: 7)

        assert content.pull("k") == "7"

    def test_nested_producer_pushes_are_kept(self):
        """Test content pushed by a producer under the same key comes first."""
        content = ContentAccumulator()

        def producer():
            content.push("k", "inner")
            return "outer"

        content.push("k", producer=producer)

        assert content.pull("k") == "innerouter"

    def test_nested_producer_can_push_other_keys(self):
        """Test a producer may fill other keys while running."""
        content = ContentAccumulator()

        def producer():
            content.push("title", "Post")
            return "<p>body</p>"

        content.push(FOR_LAYOUT, producer=producer)

        assert content.pull("title") == "Post"
        assert content.pull(FOR_LAYOUT) == "<p>body</p>"

    def test_push_empty_string_is_allowed(self):
        """Test an empty string counts as supplied text."""
        content = ContentAccumulator()
        content.push("k", "")

        assert content.pull("k") == ""
        assert "k" in content

    def test_push_without_text_or_producer_raises(self):
        """Test push with nothing to store is a usage error."""
        content = ContentAccumulator()

        with pytest.raises(InvalidArgumentException) as exc_info:
            content.push("k")

        assert "producer or a string" in exc_info.value.message
        assert exc_info.value.details["key"] == "k"
        assert isinstance(exc_info.value, ValueError)
        assert "k" not in content


class TestReset:
    """Tests for dropping content."""

    def test_reset_drops_key(self):
        """Test reset removes only the named key."""
        content = ContentAccumulator()
        content.push("a", "1")
        content.push("b", "2")

        content.reset("a")

        assert content.pull("a") is None
        assert content.keys() == ["b"]

    def test_reset_missing_key_is_noop(self):
        """Test resetting an unknown key does nothing."""
        content = ContentAccumulator()
        content.reset("missing")

        assert content.keys() == []
