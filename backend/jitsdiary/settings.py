from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"

    # Record store (PocketBase)
    POCKETBASE_URL: str = "http://127.0.0.1:8090"
    POCKETBASE_TIMEOUT_SECONDS: float = 30.0

    # Auth cookies
    AUTH_COOKIE_NAME: str = "pb_auth"
    SESSION_COOKIE_DAYS: int = 30
    OAUTH_COOKIE_MINUTES: int = 10

    ALLOW_ORIGINS: str = "*"
    API_VERSION: str = "dev"
    SESSIONS_PER_PAGE: int = 20

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cookie_secure(self) -> bool:
        return self.ENV == "production"

    @property
    def allow_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()
