# config/config.py
import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()


def _flag(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    # --- App settings ---
    FLASK_ENV = os.getenv("FLASK_ENV", "production")
    DEBUG = _flag("FLASK_DEBUG")
    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", 8000))
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")

    # --- CORS Settings ---
    # Accept comma-separated values: e.g., "http://localhost:5173,http://127.0.0.1:5173"
    ALLOWED_ORIGINS = [
        o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    ]

    # --- Storage ---
    # "sql" (durable, DATABASE_URL) or "memory" (volatile, for development)
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portfolio.db")
    SEED_DATA = _flag("SEED_DATA", "true")

    # --- Sessions ---
    SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", 7))
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "portfolio_session")
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE")
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")

    # --- Uploads ---
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads"))
    MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))

    # --- Admin account (created at startup when both are set) ---
    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
    ADMIN_NAME = os.getenv("ADMIN_NAME")

    # --- Email / Admin ---
    # Contact-form notifications go to ADMIN_EMAIL; unset disables them
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
    FROM_EMAIL = os.getenv("FROM_EMAIL")
    NO_REPLY_EMAIL = os.getenv("NO_REPLY_EMAIL")

    # --- SMTP / Flask-Mail Settings ---
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")

    # TLS/SSL flags
    MAIL_USE_TLS = _flag("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _flag("MAIL_USE_SSL")

    # Default sender used by Flask-Mail - prefer NO_REPLY_EMAIL if set
    MAIL_DEFAULT_SENDER = os.getenv("NO_REPLY_EMAIL") or os.getenv("FROM_EMAIL")
