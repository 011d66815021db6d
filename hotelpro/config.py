import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = "HotelPro"
    # Core settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database / storage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./hotelpro.db")
    # "database" (SQLAlchemy) or "memory" (process-local maps)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "database").lower()
    SEED_DATA: bool = os.getenv("SEED_DATA", "true").lower() == "true"

    # Default admin bootstrap (used by the seed)
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@grandplaza.com")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")

    # Booking rules
    BOOKING_STRICT_TRANSITIONS: bool = os.getenv("BOOKING_STRICT_TRANSITIONS", "false").lower() == "true"
    RECENT_BOOKINGS_DEFAULT_LIMIT: int = int(os.getenv("RECENT_BOOKINGS_DEFAULT_LIMIT", "10"))

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_AUTH_API: str = os.getenv("RATE_LIMIT_AUTH_API", "10/minute")

settings = Settings()
