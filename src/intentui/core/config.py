"""Configuration Management."""

from enum import Enum
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class PatchStrategy(str, Enum):
    """Where patch operations come from when previous code exists."""

    COMBINED = "combined"  # Heuristic diff, then modification log (no dedup)
    EXPLICIT_PREFERRED = "explicit_preferred"  # Modification log when it maps, else heuristic


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="INTENTUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Intent validation
    min_intent_length: int = Field(default=3, gt=0, description="Min intent length")
    max_intent_length: int = Field(default=500, gt=0, description="Max intent length")

    # Explanation
    max_explanation_words: int = Field(default=300, gt=0, description="Explanation word limit")

    # Code generation
    enable_patching: bool = Field(default=True, description="Patch previous code instead of recompiling")
    patch_strategy: PatchStrategy = Field(
        default=PatchStrategy.COMBINED, description="Source of patch operations"
    )
    component_import_path: str = Field(default="@/components/ui", description="Component library module")
    component_name: str = Field(default="GeneratedUI", description="Exported component name")

    # History
    history_limit: int = Field(default=50, gt=0, description="Default history page size")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
