"""
Telegram notifications
Business events go to the owner chat, technical failures to the developer chat
"""
import html
import logging
import traceback
from datetime import datetime
from enum import Enum
from typing import Optional

import httpx

from ..config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    """Notification types"""
    # Business (owner)
    NEW_BOOKING = "new_booking"
    NEW_SUBMISSION = "new_submission"
    NEW_ASSESSMENT = "new_assessment"

    # Technical (developer only)
    STORAGE_ERROR = "storage_error"


class NotificationService:
    """Sends messages through the Telegram Bot API"""

    def __init__(self, bot_token: Optional[str] = None, admin_chat_id: Optional[str] = None,
                 dev_chat_id: Optional[str] = None):
        self.bot_token = bot_token
        self.admin_chat_id = admin_chat_id
        self.dev_chat_id = dev_chat_id
        self.api_url = f"https://api.telegram.org/bot{self.bot_token}"

    async def send_telegram_message(self, chat_id: str, text: str, parse_mode: str = "HTML") -> bool:
        """
        Send a message to a chat

        Returns:
            bool: True if Telegram accepted it
        """
        if not chat_id or not self.bot_token:
            logger.warning("Telegram is not configured, skipping message")
            return False

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.api_url}/sendMessage",
                    json={
                        "chat_id": chat_id,
                        "text": text,
                        "parse_mode": parse_mode
                    },
                    timeout=10.0
                )
        except httpx.HTTPError as e:
            logger.error(f"Telegram request failed: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Telegram rejected message: {response.status_code} {response.text[:200]}")
            return False

        logger.info(f"Notification sent to chat {chat_id}")
        return True

    async def send_business_notification(self, notification_type: NotificationType, message: str) -> bool:
        """Owner chat"""
        icons = {
            NotificationType.NEW_BOOKING: "📅",
            NotificationType.NEW_SUBMISSION: "📝",
            NotificationType.NEW_ASSESSMENT: "🧭",
        }
        icon = icons.get(notification_type, "📢")
        full_message = f"{icon} <b>{notification_type.value.replace('_', ' ').upper()}</b>\n\n{message}"
        return await self.send_telegram_message(self.admin_chat_id, full_message)

    async def send_technical_notification(
        self,
        notification_type: NotificationType,
        message: str,
        error: Optional[Exception] = None,
        context: Optional[dict] = None
    ) -> bool:
        """Developer chat only"""
        logger.error(f"Technical notification: {notification_type.value} - {message}")

        if not self.dev_chat_id:
            logger.warning("Dev chat ID is not configured, skipping technical notification")
            return False

        full_message = "🚨 <b>TECHNICAL ALERT</b>\n\n"
        full_message += f"<b>Type:</b> {notification_type.value}\n"
        full_message += f"<b>Message:</b> {html.escape(message)}\n"
        full_message += f"<b>Time:</b> {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"

        if error:
            full_message += f"\n<b>Error:</b>\n<pre>{html.escape(str(error))}</pre>\n"
            tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            if len(tb) < 3000:  # Telegram limit is ~4096 characters
                full_message += f"\n<b>Traceback:</b>\n<pre>{html.escape(tb)}</pre>"

        if context:
            full_message += "\n<b>Context:</b>\n"
            for key, value in context.items():
                full_message += f"• {key}: {_text(value)}\n"

        return await self.send_telegram_message(self.dev_chat_id, full_message)


notification_service = NotificationService(
    bot_token=settings.TELEGRAM_BOT_TOKEN,
    admin_chat_id=settings.TELEGRAM_ADMIN_CHAT_ID,
    dev_chat_id=settings.TELEGRAM_DEV_CHAT_ID
)


# Helpers used by the routes

def _text(value) -> str:
    """User-supplied value, escaped for HTML parse mode"""
    if value is None or value == "":
        return "—"
    return html.escape(str(value))


async def notify_new_booking(booking: dict, page_name: Optional[str] = None) -> bool:
    """New booking for the owner"""
    message = (
        f"👤 <b>Client:</b> {_text(booking['client_name'])}\n"
        f"📧 <b>Email:</b> {_text(booking['client_email'])}\n"
        f"📞 <b>Phone:</b> {_text(booking.get('client_phone'))}\n\n"
        f"🗓 <b>Page:</b> {_text(page_name or 'Direct')}\n"
        f"📆 <b>Date:</b> {_text(booking['scheduled_date'])}\n"
        f"🕐 <b>Time:</b> {_text(booking['scheduled_time'])}\n"
        f"💬 <b>Notes:</b> {_text(booking.get('notes'))}"
    )
    return await notification_service.send_business_notification(NotificationType.NEW_BOOKING, message)


async def notify_form_submission(form: dict, lead: dict) -> bool:
    """New form submission for the owner"""
    message = (
        f"📋 <b>Form:</b> {_text(form['name'])}\n"
        f"👤 <b>Name:</b> {_text(lead.get('name'))}\n"
        f"📧 <b>Email:</b> {_text(lead.get('email'))}\n"
        f"📞 <b>Phone:</b> {_text(lead.get('phone'))}"
    )
    return await notification_service.send_business_notification(NotificationType.NEW_SUBMISSION, message)


async def notify_assessment(lead: dict, quiz_name: Optional[str] = None) -> bool:
    """Scored quiz or standalone assessment from a respondent who left contact details"""
    scores = lead.get("pillar_scores") or {}
    message = (
        f"🗂 <b>Quiz:</b> {_text(quiz_name or 'Protection & Alignment Assessment')}\n"
        f"👤 <b>Name:</b> {_text(lead.get('name'))}\n"
        f"📧 <b>Email:</b> {_text(lead.get('email'))}\n"
        f"🧭 <b>Result:</b> {_text(lead.get('protection_state'))}\n"
        + "".join(f"• {_text(pillar)}: {value}/12\n" for pillar, value in scores.items())
    )
    return await notification_service.send_business_notification(NotificationType.NEW_ASSESSMENT, message)


async def notify_storage_error(operation: str, error: Exception, context: Optional[dict] = None) -> bool:
    """Storage failure (developer only)"""
    return await notification_service.send_technical_notification(
        NotificationType.STORAGE_ERROR,
        f"Storage operation failed: {operation}",
        error,
        context
    )
