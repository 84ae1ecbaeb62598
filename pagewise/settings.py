from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Pagination defaults
    DEFAULT_PAGE_SIZE: int = 30
    MAX_PAGE_SIZE: int = 1000

    # Count cache settings
    COUNT_CACHE_ENABLED: bool = False
    COUNT_CACHE_TTL: int = 300
    REDIS_URL: str = "redis://localhost:6379"
    REDIS_DB: int = 1
    REDIS_SOCKET_TIMEOUT: float = 5.0
    REDIS_CONNECT_TIMEOUT: float = 5.0

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str | None = None


app_settings = Settings()
