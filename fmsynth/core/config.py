"""
Configuration management for the FM visual synthesizer.
Loads settings from environment variables.
"""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Parameter store
    max_notification_depth: int = 16  # nested set() calls from subscribers

    # LFO automation
    lfo_engine_mode: Literal["pure", "smoothed"] = "pure"
    lfo_smoothing_time_constant: float = 0.5  # seconds
    lfo_max_frame_delta: float = 1.0  # seconds, larger steps are skipped

    # Presets
    default_preset: str = "manual"
    preset_file: Optional[str] = None

    # Headless rendering
    canvas_width: int = 1920
    canvas_height: int = 1080
    frame_rate: int = 60  # Hz

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Get settings instance.
    Useful for passing into a SynthSession explicitly.
    """
    return settings
