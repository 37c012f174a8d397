from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "Le Boudoir du Boubou"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    DATABASE_URL: str = "sqlite+pysqlite:///./boudoir.db"
    ADMIN_NAME: str = "Administrateur"
    ADMIN_EMAIL: str = "admin@boudoir.example"
    ADMIN_PASSWORD: str = "change-me-1"
    METRICS_ENABLED: bool = True
    DB_RETRY_MAX_ATTEMPTS: int = 3
    DB_RETRY_DELAY_SECONDS: float = 1.0
    DB_RETRY_BACKOFF: str = "fixed"
    DB_RETRY_MAX_DELAY_SECONDS: float = 5.0
    ARTICLES_DEFAULT_PAGE_SIZE: int = 12
    ARTICLES_MAX_PAGE_SIZE: int = 50
    ARTICLE_MAX_IMAGES: int = 8
    ARTICLE_MAX_PRICE: int = 10000
    ANALYTICS_DEFAULT_PERIOD_DAYS: int = 30


settings = Settings()
