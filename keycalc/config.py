"""Settings for the calculator, loaded from KEYCALC_* env vars (and .env)."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KEYCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shown in place of a result when an operation is undefined
    error_marker: str = "Error"
    # Evaluation history kept per session
    history_size: int = 20

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Streamlit page
    page_title: str = "Calculator"


def get_settings() -> Settings:
    return Settings()
