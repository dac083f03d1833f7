# app/services/notification_service.py
"""
Notification dispatcher for court date reminders.

Delivers a reminder over SMS (Twilio REST API) and email (SendGrid v3 API)
when those channels are configured, then records an in-app notification
for the client.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.models import CourtDate, CourtDateReminder, NotificationPriority, NotificationType
from app.services.exceptions import DispatchError, StoreFailure
from app.services.stores import ClientContact
from app.utils.notifications import court_reminder_content, create_notification

logger = logging.getLogger(__name__)

SMS_KEYS = ("account_sid", "auth_token", "from_number")
EMAIL_KEYS = ("api_key", "from_email")


def channel_enabled(config: Dict[str, str], keys) -> bool:
    """A channel is usable once every credential it needs is set"""
    return all(config.get(key) for key in keys)


class NotificationService:
    def __init__(
        self,
        db: Session,
        sms_config: Optional[Dict[str, str]] = None,
        email_config: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.db = db
        self.sms_config = sms_config if sms_config is not None else settings.SMS
        self.email_config = email_config if email_config is not None else settings.EMAIL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.transport = transport

    @property
    def sms_enabled(self) -> bool:
        return channel_enabled(self.sms_config, SMS_KEYS)

    @property
    def email_enabled(self) -> bool:
        return channel_enabled(self.email_config, EMAIL_KEYS)

    async def send(
        self,
        reminder: CourtDateReminder,
        court_date: CourtDate,
        client: ClientContact,
    ) -> int:
        """Send a court date reminder to a client and return the in-app notification id"""
        content = court_reminder_content(reminder.kind, court_date, client.display_name)

        if self.sms_enabled and client.phone_number:
            await self.send_sms(client.phone_number, content["message"])
        else:
            logger.debug(f"SMS skipped for reminder {reminder.id}: channel not configured or no phone number")

        if self.email_enabled and client.email:
            await self.send_email(client.email, content["title"], content["message"])
        else:
            logger.debug(f"Email skipped for reminder {reminder.id}: channel not configured or no email")

        try:
            notification = create_notification(
                db=self.db,
                user_id=client.external_id,
                title=content["title"],
                message=content["message"],
                notification_type=NotificationType.COURT_REMINDER,
                priority=NotificationPriority(reminder.priority.value),
                related_entity_type="court_date",
                related_entity_id=court_date.id,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(f"Could not record notification for reminder {reminder.id}: {e}") from e

        logger.info(f"Sent {reminder.kind.value} reminder {reminder.id} to client {client.external_id}")
        return notification.id

    async def send_sms(self, to_number: str, body: str) -> None:
        account_sid = self.sms_config["account_sid"]
        url = f"{self.sms_config.get('api_base', 'https://api.twilio.com/2010-04-01')}/Accounts/{account_sid}/Messages.json"
        await self._post(
            "sms",
            url,
            auth=(account_sid, self.sms_config["auth_token"]),
            data={"To": to_number, "From": self.sms_config["from_number"], "Body": body},
        )

    async def send_email(self, to_email: str, subject: str, body: str) -> None:
        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.email_config["from_email"]},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }
        await self._post(
            "email",
            self.email_config.get("api_url", "https://api.sendgrid.com/v3/mail/send"),
            headers={"Authorization": f"Bearer {self.email_config['api_key']}"},
            json=payload,
        )

    async def send_test_sms(self, to_number: str) -> bool:
        """Send a test SMS; returns False instead of raising when delivery fails"""
        if not self.sms_enabled:
            logger.warning("Test SMS requested but the SMS channel is not configured")
            return False
        try:
            await self.send_sms(to_number, "Test message from the court reminder service.")
        except DispatchError as e:
            logger.error(f"Test SMS failed: {e}")
            return False
        return True

    async def _post(self, channel: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise DispatchError(channel, str(e)) from e
        if response.is_error:
            raise DispatchError(channel, f"HTTP {response.status_code}: {response.text[:200]}")
        return response
