"""Outbound reminders for care events."""
from cultivo.notifications.messages import (
    format_event_message,
    build_whatsapp_link,
    dispatch_event,
)

__all__ = [
    "format_event_message",
    "build_whatsapp_link",
    "dispatch_event",
]
