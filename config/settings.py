"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Data
    data_directory: str = "data"  # folder holding the dashboard CSV exports

    # Feed
    default_top_n: int = 5

    # Logging
    log_level: str = "INFO"

    # API
    api_title: str = "Commerce Insights API"


settings = Settings()
