"""Application settings and configuration."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from exampaper.models.paper import Orientation, RenderOptions

# Load .env file if present
load_dotenv()

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Rendering defaults
    font_family: str = Field(
        default="Times New Roman",
        min_length=1,
        description="Default font family for rendered papers",
        validation_alias="EXAMPAPER_FONT_FAMILY",
    )

    font_size: int = Field(
        default=12,
        gt=0,
        description="Default font size in points",
        validation_alias="EXAMPAPER_FONT_SIZE",
    )

    orientation: Orientation = Field(
        default=Orientation.PORTRAIT,
        description="Default page orientation",
        validation_alias="EXAMPAPER_ORIENTATION",
    )

    # Output Settings
    default_output_dir: str = Field(
        default="output",
        description="Directory for timestamped exports",
        validation_alias="EXAMPAPER_OUTPUT_DIR",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI",
        validation_alias="EXAMPAPER_LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise to an upper-case level name known to logging."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            expected = ", ".join(LOG_LEVELS)
            raise ValueError(f"unknown log level '{value}' (expected one of {expected})")
        return level

    def render_options(self) -> RenderOptions:
        """Build render options from the configured defaults."""
        return RenderOptions(
            font_family=self.font_family,
            font_size=self.font_size,
            orientation=self.orientation,
        )


# Loaded once, then shared by every command in the process
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
