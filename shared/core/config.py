import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    # required: both services refuse to start without the shared secret
    JWT_SECRET: str
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))
    # tokens minted by the provisioning worker for itself
    SERVICE_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("SERVICE_TOKEN_EXPIRE_MINUTES", 10))

    # Catalog (relational) store
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASS: str = os.getenv("DB_PASS", "postgres")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_NAME: str = os.getenv("DB_NAME", "pettech")

    # Inventory (document) store
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017/default")
    MONGO_DB_NAME: str | None = os.getenv("MONGO_DB_NAME")
    MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", 5000))

    # Stock service as seen from the core service
    STOCK_SERVICE_URL: str = os.getenv(
        "STOCK_SERVICE_URL", "http://localhost:3000")
    STOCK_SERVICE_TIMEOUT: float | None = (
        float(os.getenv("STOCK_SERVICE_TIMEOUT"))
        if os.getenv("STOCK_SERVICE_TIMEOUT") else None
    )
    STOCK_STRICT_MUTATIONS: bool = os.getenv(
        "STOCK_STRICT_MUTATIONS", "False").lower() == "true"

    PROVISIONING_RETRY_INTERVAL: int = int(
        os.getenv("PROVISIONING_RETRY_INTERVAL", 30))
    PROVISIONING_BATCH_SIZE: int = int(
        os.getenv("PROVISIONING_BATCH_SIZE", 50))
    # outbox rows younger than this may still have their inline call in flight;
    # keep it above STOCK_SERVICE_TIMEOUT
    PROVISIONING_GRACE_SECONDS: int = int(
        os.getenv("PROVISIONING_GRACE_SECONDS", 300))
    PROVISIONING_BACKOFF_SECONDS: int = int(
        os.getenv("PROVISIONING_BACKOFF_SECONDS", 30))
    PROVISIONING_MAX_BACKOFF_SECONDS: int = int(
        os.getenv("PROVISIONING_MAX_BACKOFF_SECONDS", 3600))
    PROVISIONING_MAX_ATTEMPTS: int = int(
        os.getenv("PROVISIONING_MAX_ATTEMPTS", 10))

    CORE_SERVICE_PORT: int = int(os.getenv("CORE_SERVICE_PORT", 3030))
    STOCK_SERVICE_PORT: int = int(os.getenv("STOCK_SERVICE_PORT", 3000))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

CORE_DATABASE_URL = (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)
