from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "biztime_data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # "test" switches to the test database
    BIZTIME_ENV: str = "development"

    DATABASE_URL: str = f"sqlite:///{DATA_DIR / 'biztime.db'}"
    TEST_DATABASE_URL: str = f"sqlite:///{DATA_DIR / 'biztime_test.db'}"

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def database_url(self) -> str:
        url = self.TEST_DATABASE_URL if self.BIZTIME_ENV == "test" else self.DATABASE_URL
        # Heroku-style URLs are not accepted by SQLAlchemy 2.x
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
