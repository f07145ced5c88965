"""Application configuration using Pydantic Settings."""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.enhanced_logging import setup_logger


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application configuration using Pydantic Settings"""

    # Logging
    log_level: str = "INFO"
    log_path: str = ""  # Directory for dated log files; empty keeps console-only logging

    # Card building
    card_id_prefix: str = Field(
        default="card",
        description="Prefix for the cardId of each card in a composed message ('<prefix>-<index>')",
    )
    coalesce_buttons: bool = Field(
        default=True,
        description="Merge adjacent loose Button widgets into one button group before wrapping them in a section",
    )

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("card_id_prefix")
    @classmethod
    def _check_card_id_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("card_id_prefix must not be empty")
        return value.strip()

    def card_id(self, index: int) -> str:
        """Return the cardId used for the card at ``index`` in a message."""
        return f"{self.card_id_prefix}-{index}"


# Global settings instance
settings = Settings()

logger = setup_logger(
    level=getattr(logging, settings.log_level),
    log_path=settings.log_path or None,
)
