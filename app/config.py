"""facedb — Centralised Settings (Pydantic v2).

Loads from .env, FACEDB_* environment variables, or defaults. Only the CLI
reads these; the ``ingest`` package takes explicit ``ImportParameters``.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ingest.types import ImportParameters


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FACEDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────
    app_name: str = "facedb"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    # ── Import ───────────────────────────────────────────────
    max_image_side_length: int | None = None
    generate_vertically_mirrored: bool = False

    @field_validator("max_image_side_length")
    @classmethod
    def _positive_side_length(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("max_image_side_length must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    def import_parameters(self) -> ImportParameters:
        return ImportParameters(
            max_image_side_length=self.max_image_side_length,
            generate_vertically_mirrored=self.generate_vertically_mirrored,
        )


settings = Settings()
