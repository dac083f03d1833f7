#!/usr/bin/env python3
"""
Launch the court reminder API under uvicorn.

Host, port and reload come from HOST / PORT / RELOAD; the reminder
scheduler and outbound channels are configured through the same .env.
"""

import uvicorn

from app.config.settings import settings
from app.services.notification_service import EMAIL_KEYS, SMS_KEYS, channel_enabled


def _channel_status(config, keys):
    return "configured" if channel_enabled(config, keys) else "disabled"


def main():
    server = settings.SERVER

    print("Court Reminder API")
    print(f"  listening on   {server['host']}:{server['port']} (reload={server['reload']})")
    print(f"  database       {settings.DATABASE['url']}")
    print(f"  scheduler      {'enabled' if settings.SCHEDULER['enabled'] else 'disabled'}")
    print(f"  sms (twilio)   {_channel_status(settings.SMS, SMS_KEYS)}")
    print(f"  email          {_channel_status(settings.EMAIL, EMAIL_KEYS)}")

    uvicorn.run(
        "main:app",
        host=server['host'],
        port=server['port'],
        reload=server['reload'],
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
