"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

VERSION = "0.1.0"


class Settings(BaseSettings):
    """derpiquery settings loaded from environment variables.

    Only the HTTP client reads these. URL building and record parsing
    never depend on configuration.
    """

    # Optional API key, forwarded when a search carries none
    api_key: str = ""

    # -1 keeps the account (or site) default filter
    filter_id: int = -1

    # HTTP
    request_timeout: float = 15.0
    user_agent: str = f"derpiquery/{VERSION}"

    model_config = {
        "env_prefix": "DERPIQUERY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton instance
settings = Settings()
