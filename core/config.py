# core/config.py
import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "http://localhost:4200,"
    "http://localhost:3000"
)

def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]

@dataclass
class Settings:
    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///library.db")

    # API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    )

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Lending
    default_loan_days: int = int(os.getenv("DEFAULT_LOAN_DAYS", "14"))


settings = Settings()
