"""Pytest configuration and shared fixtures."""

import pytest

from controller_render.config import ControllerConfig, Settings
from controller_render.context import RenderContext
from controller_render.controller import Controller
from controller_render.mime import default_mime_registry
from controller_render.views.registry import InMemoryTemplateRegistry


@pytest.fixture
def registry():
    """Empty in-memory template registry."""
    return InMemoryTemplateRegistry()


@pytest.fixture
def render_context():
    """Render context for PostsController#show with no Accept header."""
    return RenderContext(action_name="show", controller_name="posts")


@pytest.fixture
def mime_types():
    """Registry with the standard formats."""
    return default_mime_registry()


@pytest.fixture
def test_settings(tmp_path):
    """Settings instance with test values."""
    return Settings(
        views_dir=tmp_path / "views",
        template_root="",
        layout_root="layout",
        default_content_type="html",
    )


@pytest.fixture
def make_controller(registry, render_context, mime_types):
    """Factory building a posts controller over the shared registry and context."""

    def factory(**config_overrides) -> Controller:
        values = {"name": "posts", "provides": ["html", "json", "xml", "text"]}
        values.update(config_overrides)
        return Controller(render_context, ControllerConfig(**values), registry, mime_types)

    return factory


@pytest.fixture
def layout_renderer():
    """Layout renderer that wraps the content thrown for the layout."""

    def render(context: RenderContext) -> str:
        return f"<app>{context.content.pull('for_layout')}</app>"

    return render
