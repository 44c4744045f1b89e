"""Notification collaborator: hands the order summary to a messaging relay."""
from __future__ import annotations

import logging
from typing import Protocol

from gordopods.services.notification_builder import build_whatsapp_url

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def send(self, destination: str, message: str) -> str:
        """Deliver ``message`` to ``destination``; returns a delivery reference."""
        ...


class WhatsAppLinkNotifier:
    """Produces the wa.me link the storefront redirects the customer to."""

    def __init__(self) -> None:
        self.last_url: str | None = None

    async def send(self, destination: str, message: str) -> str:
        url = build_whatsapp_url(destination, message)
        self.last_url = url
        logger.info("WhatsApp link prepared for %s", destination)
        return url
