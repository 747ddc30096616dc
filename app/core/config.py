# app/core/config.py
from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite://db.sqlite3"
    CLERK_JWKS_URL: str = "https://workable-kit-45.clerk.accounts.dev/.well-known/jwks.json"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    IMPORT_MAX_ROWS: int = 200
    IMPORT_MAX_BYTES: int = 2_000_000

settings = Settings()
