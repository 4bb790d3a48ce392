import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from controller_render.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path.cwd()


class Settings(BaseSettings):
    """Rendering settings with validation.

    Values come from ``RENDER_*`` environment variables or a ``.env`` file in
    the working directory.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator decorator
    """

    views_dir: Path = Field(default=BASE_DIR / "views", description="Directory holding template files")
    template_root: str = Field(default="", description="Prefix for action templates inside the registry")
    layout_root: str = Field(default="layout", description="Prefix for layouts inside the registry")
    default_content_type: str = Field(default="html", min_length=1, description="Format used when nothing is negotiated")
    template_extensions: list[str] = Field(
        default_factory=lambda: [".jinja", ".j2"],
        description="Engine extensions tried after a logical template path",
    )

    log_level: str = Field(default="INFO", description="Root logging level")
    log_file: Path | None = Field(default=None, description="JSON log file, console only when unset")

    model_config = SettingsConfigDict(
        env_prefix="RENDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("template_root", "layout_root", mode="after")
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Strip surrounding whitespace and slashes from registry prefixes."""
        return v.strip().strip("/")

    @field_validator("default_content_type", mode="after")
    @classmethod
    def validate_default_content_type(cls, v: str) -> str:
        """Ensure the default format is a bare lowercase name."""
        v = v.strip().lower().lstrip(".")
        if not v:
            raise ValueError("default_content_type cannot be empty")
        return v

    @field_validator("template_extensions", mode="after")
    @classmethod
    def validate_template_extensions(cls, v: list[str]) -> list[str]:
        """Ensure every engine extension starts with a dot."""
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"template extension must start with '.': {ext!r}")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


class ControllerConfig(BaseModel):
    """Per-controller rendering configuration.

    Resolved once when a controller is built and handed to it explicitly.
    """

    name: str = Field(min_length=1, description="Controller name, used for template and layout conventions")
    layout: str | None = Field(default=None, description="Default layout, relative to the layout root")
    provides: list[str] = Field(default_factory=lambda: ["html"], min_length=1, description="Formats this controller can render")
    template_root: str = ""
    layout_root: str = "layout"

    @field_validator("provides", mode="after")
    @classmethod
    def validate_provides(cls, v: list[str]) -> list[str]:
        """Normalize provided formats to lowercase names."""
        return [fmt.strip().lower().lstrip(".") for fmt in v]

    @classmethod
    def from_settings(cls, name: str, settings: Settings | None = None, **overrides) -> "ControllerConfig":
        """Build a controller config seeded from application settings.

        Args:
            name: Controller name
            settings: Settings instance, the cached singleton when omitted
            **overrides: Field values that replace the seeded ones

        Returns:
            ControllerConfig for the controller
        """
        settings = settings or get_settings()
        values = {
            "name": name,
            "template_root": settings.template_root,
            "layout_root": settings.layout_root,
            "provides": [settings.default_content_type],
        }
        values.update(overrides)
        log_with_context(
            logger,
            "debug",
            "Controller config resolved",
            controller=name,
            layout=values.get("layout"),
            event_type="controller_config",
        )
        return cls(**values)


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
