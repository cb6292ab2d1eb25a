from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Server side (PostgreSQL behind the REST API)
    database_url: str | None = None
    DATABASE_SSL: bool = False

    # Client side
    LOCAL_DATABASE_PATH: str = "tasks.db"
    API_URL: str = "http://localhost:3000"
    API_TIMEOUT: float = 10.0

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "error.log"

    class Config:
        env_file = ".env"
        extra = "ignore"  # .env also carries PORT for gunicorn

settings = Settings()
