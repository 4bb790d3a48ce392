"""Tests for render options and targets."""

from http import HTTPStatus

import pytest
from pydantic import ValidationError

from controller_render.models import ActionTarget, LayoutOnly, LiteralTarget, RenderOptions, TemplateTarget, coerce_status


class TestCoerceStatus:
    """Tests for status coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (200, 200),
            (HTTPStatus.CREATED, 201),
            ("404", 404),
            ("not_found", 404),
            ("Not Found", 404),
            ("NotFound", 404),
            ("Accepted", 202),
            ("too-many-requests", 429),
        ],
    )
    def test_coerce_status(self, value, expected):
        """Test integers, digit strings and status names are accepted."""
        assert coerce_status(value) == expected

    @pytest.mark.parametrize("value", ["teapot_status", True, 2.5, None])
    def test_coerce_status_rejects(self, value):
        """Test unknown names and non-status values are rejected."""
        with pytest.raises(ValueError):
            coerce_status(value)


class TestRenderOptions:
    """Tests for RenderOptions validation."""

    def test_defaults(self):
        """Test every option is unset by default."""
        options = RenderOptions()

        assert options.format is None
        assert options.template is None
        assert options.status is None
        assert options.layout is None

    def test_status_coerced(self):
        """Test status names become integers."""
        assert RenderOptions(status="created").status == 201

    def test_format_normalized(self):
        """Test formats are normalized to bare lowercase names."""
        assert RenderOptions(format=".JSON").format == "json"

    def test_empty_format_rejected(self):
        """Test a blank format is invalid."""
        with pytest.raises(ValidationError):
            RenderOptions(format="  ")

    def test_layout_false(self):
        """Test False disables the layout."""
        assert RenderOptions(layout=False).layout is False

    def test_layout_true_rejected(self):
        """Test True is not a layout."""
        with pytest.raises(ValidationError):
            RenderOptions(layout=True)

    def test_unknown_option_rejected(self):
        """Test unknown options fail validation."""
        with pytest.raises(ValidationError):
            RenderOptions(partial="sidebar")

    def test_bad_status_rejected(self):
        """Test an unknown status name fails validation."""
        with pytest.raises(ValidationError):
            RenderOptions(status="sort_of_ok")


class TestTargets:
    """Tests for render targets."""

    def test_targets_are_values(self):
        """Test targets compare by value."""
        assert ActionTarget() == ActionTarget(None)
        assert TemplateTarget("a") == TemplateTarget("a")
        assert LiteralTarget("x") != LiteralTarget("y")
        assert LayoutOnly() == LayoutOnly()
