from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "Vocab Cards API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Storage
    DATABASE_URL: str = "sqlite:///./cards.db"

    # Deck par défaut (pas de multi-utilisateur)
    DEFAULT_USER_ID: str = "default_user"

    # Recherche
    SEARCH_DEBOUNCE_MS: int = 300

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
