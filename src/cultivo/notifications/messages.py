"""
Event reminder messages.

Serializes an Event into Spanish plain text and hands it to WhatsApp through a
``wa.me`` deep link. Dispatch never raises on channel failure; it logs the
error and reports a "failed" status instead.
"""
from typing import Callable, Optional
from urllib.parse import quote
import logging
import re
import webbrowser

from cultivo.core.calendar import format_date, weekday_name
from cultivo.core.config import NotificationConfig, get_config
from cultivo.core.exceptions import NotificationError
from cultivo.core.types import Event, PlantingMethod
from cultivo.data.contracts import VarietyTable

logger = logging.getLogger(__name__)

WATER_ONLY = "Solo agua pH 6.3-6.7"


def format_event_message(event: Event, varieties: Optional[VarietyTable] = None) -> str:
    """Plain-text reminder for one event"""
    lines = [
        f"🌱 {event.type.label} - {weekday_name(event.scheduled_at).capitalize()} "
        f"{format_date(event.scheduled_at)}",
        f"Fase: {event.phase_name}",
    ]

    if event.products:
        lines.append("Productos:")
        for product, dose in zip(event.products, event.doses):
            lines.append(f"  - {product}: {dose:g} ml/L")
    else:
        lines.append(WATER_ONLY)

    lines.append(f"Litros: Maceta {event.volumes.pot} | Suelo {event.volumes.ground}")

    if varieties is not None:
        plants = varieties.select(event.plant_ids)
        if plants:
            lines.append("Plantas:")
            for plant in plants:
                method = "maceta" if plant.method == PlantingMethod.POT else "suelo"
                lines.append(
                    f"  - {plant.name} ({method}): {event.volumes.for_method(plant.method)}"
                )
    else:
        lines.append(f"Plantas: {', '.join(event.plant_ids)}")

    if event.notes:
        lines.append(f"Notas: {event.notes}")

    return "\n".join(lines)


def build_whatsapp_link(message: str, phone_number: str,
                        base_url: str = "https://wa.me") -> str:
    """wa.me link with the message pre-filled; the number keeps digits only"""
    digits = re.sub(r"\D", "", phone_number or "")
    if not digits:
        raise NotificationError(f"Phone number {phone_number!r} has no digits")
    return f"{base_url.rstrip('/')}/{digits}?text={quote(message)}"


def dispatch_event(event: Event,
                   varieties: Optional[VarietyTable] = None,
                   config: Optional[NotificationConfig] = None,
                   opener: Callable[[str], object] = webbrowser.open) -> str:
    """
    Send a reminder for ``event``.

    Returns "sent", "failed" or "skipped" (notifications disabled).
    """
    config = config or get_config().notifications
    if not config.enabled:
        logger.info(f"dispatch_event: notifications disabled, skipping {event.id}")
        return "skipped"

    message = format_event_message(event, varieties)
    try:
        link = build_whatsapp_link(message, config.phone_number, config.whatsapp_base_url)
        opener(link)
    except Exception as exc:
        logger.error(f"dispatch_event: failed for {event.id}: {exc}")
        return "failed"

    logger.info(f"dispatch_event: sent {event.type.value} reminder {event.id}")
    return "sent"
