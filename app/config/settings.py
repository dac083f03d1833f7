# app/config/settings.py
# Runtime configuration for the court reminder service

import os
from datetime import time
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Settings:
    """Application settings resolved from environment variables"""

    # Database
    DATABASE = {
        'url': os.getenv('DATABASE_URL', 'sqlite:///./court_reminders.db'),
        # Managed PostgreSQL hosts usually need sslmode=require
        'sslmode': os.getenv('DATABASE_SSLMODE', ''),
    }

    # Reminder policy
    REMINDERS = {
        'hour': int(os.getenv('REMINDER_HOUR', 9)),
        'minute': int(os.getenv('REMINDER_MINUTE', 0)),
        'upcoming_window_days': int(os.getenv('UPCOMING_WINDOW_DAYS', 30)),
    }

    # Periodic jobs
    SCHEDULER = {
        'enabled': _env_bool('SCHEDULER_ENABLED', 'true'),
        'dispatch_interval_minutes': int(os.getenv('DISPATCH_INTERVAL_MINUTES', 5)),
        'overdue_check_interval_minutes': int(os.getenv('OVERDUE_CHECK_INTERVAL_MINUTES', 60)),
        'scheduling_sweep_hour': int(os.getenv('SCHEDULING_SWEEP_HOUR', 1)),
    }

    # Outbound channels
    SMS = {
        'account_sid': os.getenv('TWILIO_ACCOUNT_SID', ''),
        'auth_token': os.getenv('TWILIO_AUTH_TOKEN', ''),
        'from_number': os.getenv('TWILIO_FROM_NUMBER', ''),
        'api_base': os.getenv('TWILIO_API_BASE', 'https://api.twilio.com/2010-04-01'),
    }

    EMAIL = {
        'api_key': os.getenv('SENDGRID_API_KEY', ''),
        'from_email': os.getenv('NOTIFICATION_FROM_EMAIL', ''),
        'api_url': os.getenv('SENDGRID_API_URL', 'https://api.sendgrid.com/v3/mail/send'),
    }

    REQUEST_TIMEOUT_SECONDS = float(os.getenv('REQUEST_TIMEOUT_SECONDS', 10))

    # Uvicorn launcher
    SERVER = {
        'host': os.getenv('HOST', '0.0.0.0'),
        'port': int(os.getenv('PORT', 8000)),
        'reload': _env_bool('RELOAD', 'false'),
    }

    # HTTP
    CORS_ORIGINS = os.getenv(
        'CORS_ORIGINS',
        'http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000',
    )

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    @classmethod
    def reminder_time(cls) -> time:
        """Time of day at which reminders are delivered"""
        return time(hour=cls.REMINDERS['hour'], minute=cls.REMINDERS['minute'])

    @classmethod
    def cors_origins(cls) -> List[str]:
        """Parse CORS origins from a comma-separated string"""
        if cls.CORS_ORIGINS.strip() in {'', '*'}:
            return ['*']
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(',') if origin.strip()]


settings = Settings()
