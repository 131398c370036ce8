"""Application configuration from environment variables."""
from pathlib import Path
from urllib.parse import quote

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """All config comes from env vars or .env.imagehost file."""

    model_config = SettingsConfigDict(env_file=".env.imagehost", env_file_encoding="utf-8")

    # Metadata store. DATABASE_URL, when set, wins over the DB_* parts.
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "image-application"
    DATABASE_URL: str = ""

    API_PORT: int = 8081
    LOG_LEVEL: str = "INFO"

    # Uploaded files land in FILE_STORAGE_PATH and are served under STATIC_URL_PATH
    FILE_STORAGE_PATH: str = "./static"
    STATIC_URL_PATH: str = "/static"
    STATIC_BASE_URL: str = "http://localhost:8081/static"
    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")

    MAX_UPLOAD_BYTES: int = 32 << 20

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{quote(self.DB_USER, safe='')}:{quote(self.DB_PASSWORD, safe='')}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{quote(self.DB_NAME, safe='')}"
        )


settings = Settings()
