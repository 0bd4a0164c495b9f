import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix="SCOUTBASE_",
    )

    WORKERS: int = 1
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] | str = "http://localhost:3000"
    APP_VERSION: str = "1.0"

    API_BASE_URL: str = "http://localhost:5000/api"
    ASSET_ORIGIN: str = "http://localhost:5000"
    AUTH_HEADER: str = "x-auth-token"
    REQUEST_TIMEOUT: float = 10.0
    PUBLIC_ROUTE_PREFIXES: list[str] = ["/auth", "/announcements"]
    # seconds a member's badge list is served before it is re-fetched
    BADGE_RECORDS_MAX_AGE: float = 60.0

    LOGIN_PATH: str = "/login"
    HOME_PATH: str = "/"

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [
                origin.strip()
                for origin in self.CORS_ORIGINS.split(",")
                if origin.strip()
            ]
        return self.CORS_ORIGINS


settings = AppConfig()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
