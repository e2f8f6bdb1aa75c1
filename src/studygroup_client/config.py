from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:8080/api"
    HTTP_TIMEOUT_SECONDS: float = 30.0
    HTTP_CONNECT_TIMEOUT_SECONDS: float = 10.0

    CHAT_POLL_INTERVAL: float = 3.0

    PREFERENCES_DB_URL: str = "sqlite+aiosqlite:///studyapp_prefs.db"

    LOG_LEVEL: str = "INFO"

    NETWORK_ERROR_MESSAGE: str = "A network error occurred. Please try again."

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
