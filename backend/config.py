"""
Application settings for the Rent Manager backend.

All values come from environment variables (optionally loaded from a .env
file) so the same code runs locally, in tests and in production.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Database connection settings
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
POSTGRES_SERVER = os.getenv("POSTGRES_SERVER", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_DB = os.getenv("POSTGRES_DB", "rent_db")

# DATABASE_URL wins over the individual POSTGRES_* settings when present
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+psycopg2://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_SERVER}:{POSTGRES_PORT}/{POSTGRES_DB}",
)

# JWT settings
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "rent-manager-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

# All "today" calculations and scheduled jobs use this timezone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Kolkata")

# Rent generation
RENT_DUE_DAY = int(os.getenv("RENT_DUE_DAY", "5"))
RENT_GENERATION_DAY = int(os.getenv("RENT_GENERATION_DAY", "1"))
RENT_GENERATION_HOUR = int(os.getenv("RENT_GENERATION_HOUR", "6"))
ENABLE_SCHEDULER = os.getenv("ENABLE_SCHEDULER", "true").lower() == "true"

CORS_ALLOWED_ORIGINS = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000",
)

LOG_DIR = os.getenv("LOG_DIR", "logs")
