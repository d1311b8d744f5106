from os import getenv


def _first_env(*names: str, default: str = "") -> str:
    # premier nom défini gagne (DB_HOST avant PGHOST, etc.)
    for name in names:
        value = getenv(name)
        if value:
            return value
    return default


class Settings:
    def __init__(self):
        self.DB_HOST = _first_env("DB_HOST", "PGHOST", default="localhost")
        self.DB_PORT = int(_first_env("DB_PORT", "PGPORT", default="5432"))
        self.DB_NAME = _first_env("DB_NAME", "PGDATABASE", default="cms_pages")
        self.DB_USER = _first_env("DB_USER", "PGUSER", default="postgres")
        self.DB_PASSWORD = _first_env("DB_PASSWORD", "PGPASSWORD")
        self.DATABASE_URL = getenv("DATABASE_URL") or (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

        self.DB_MAX_CONNECTIONS = int(getenv("DB_MAX_CONNECTIONS", "20"))
        self.DB_IDLE_TIMEOUT = int(getenv("DB_IDLE_TIMEOUT", "30000"))  # ms
        self.DB_CONNECTION_TIMEOUT = int(getenv("DB_CONNECTION_TIMEOUT", "2000"))  # ms

        self.API_BEARER_TOKEN = _first_env("API_BEARER_TOKEN", "BEARER_TOKEN", default="default-token")

        self.LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()
        self.SERVICE_NAME = getenv("SERVICE_NAME", "CMS Pages API")
        self.SERVICE_VERSION = getenv("SERVICE_VERSION", "1.0.0")
        self.API_HOST = getenv("API_HOST", "127.0.0.1")
        self.API_PORT = int(getenv("API_PORT", "8080"))


settings = Settings()
