"""
Appointment e-mail notifications.

Delivery is a logging stub: messages are written to the application log.
Every send is best-effort; failures are logged and never reach the caller.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)

TEMPLATE_BOOKING = "booking"
TEMPLATE_CONFIRMATION = "confirmation"
TEMPLATE_REJECTION = "rejection"


async def send_appointment_email(to: str, subject: str, template: str, data: Dict[str, Any]) -> None:
    try:
        if not to:
            logger.warning(f"Skipping '{template}' notification '{subject}': no recipient address")
            return
        logger.info(f"Email sent to {to}: {subject} [{template}] {data}")
    except Exception:
        logger.exception(f"Failed to send '{template}' notification to {to}")


async def dispatch(
    background_tasks: Optional[BackgroundTasks],
    to: str,
    subject: str,
    template: str,
    data: Dict[str, Any],
) -> None:
    """
    Queue the send on the response's background tasks when running inside a
    request; otherwise send inline (scripts, tests).
    """
    if background_tasks is not None:
        background_tasks.add_task(send_appointment_email, to, subject, template, data)
        return
    try:
        await send_appointment_email(to, subject, template, data)
    except Exception:
        logger.exception(f"Notification '{subject}' to {to} failed")
