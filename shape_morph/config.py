"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Morphing settings loaded from environment variables.

    Priority: environment variables (SHAPE_MORPH_*) > .env file > defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="SHAPE_MORPH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Geometry
    precision: int = 2  # decimals kept for arc output and intermediate frames

    # Frame driver
    frame_rate: int = 60  # ticks per second while a transition runs

    # Per-point scheduling (milliseconds)
    min_delay: float = 0
    max_delay: float = 1000
    min_duration: float = 3000
    max_duration: float = 5000

    # Easing used when a transition does not name one
    timing_function: str = "ease_out_cubic"

    # Logging
    log_json: bool = False  # JSON lines instead of the human-readable format
    log_level: str = "INFO"
    log_file: str | None = None  # rotating file receiving every record
    error_log_file: str | None = None  # rotating file receiving errors only


settings = Settings()
