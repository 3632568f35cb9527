# SPDX-License-Identifier: Apache-2.0

"""
SMS transports for the contact relay.

The transport is chosen once at startup: a live Twilio transport when
provider credentials and a sender number are configured, otherwise a
deep-link-only transport that logs the message and leaves delivery to the
requester's own device.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from config import AppSettings, TwilioConfig
from models.enums import TransportMode

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class DeliveryResult:
    """Result of a send attempt."""
    delivered: bool
    mode: TransportMode
    message_id: Optional[str] = None


class DeliveryError(Exception):
    """Raised when the SMS provider rejects or fails a send."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details


class MessageTransport(ABC):
    """Outbound SMS strategy."""

    mode: TransportMode

    @property
    def is_live(self) -> bool:
        return self.mode is TransportMode.LIVE

    @abstractmethod
    def send(self, to: str, body: str) -> DeliveryResult:
        """
        Send one message.

        Raises:
            DeliveryError: If a configured provider fails the send
        """

    def health_check(self) -> dict:
        return {"status": "healthy", "mode": self.mode.value}


class TwilioTransport(MessageTransport):
    """Delivers messages through Twilio Programmable SMS. No retries."""

    mode = TransportMode.LIVE

    def __init__(self, config: TwilioConfig, client: Optional[Client] = None):
        self.from_number = config.from_number
        self.client = client or Client(config.account_sid, config.auth_token)
        logger.info("Twilio transport ready")

    def send(self, to: str, body: str) -> DeliveryResult:
        with tracer.start_as_current_span("sms.twilio.send") as span:
            span.set_attribute("sms.body_length", len(body))
            try:
                message = self.client.messages.create(to=to, from_=self.from_number, body=body)
            except TwilioException as e:
                details = getattr(e, "msg", None) or str(e)
                span.set_status(Status(StatusCode.ERROR, details))
                logger.error(f"Twilio send error: {details}")
                raise DeliveryError(details)

            logger.info(f"SMS relayed via Twilio: {message.sid}")
            return DeliveryResult(delivered=True, mode=self.mode, message_id=message.sid)


class DeepLinkOnlyTransport(MessageTransport):
    """Simulates delivery; the caller relies on deep links instead."""

    mode = TransportMode.DEEP_LINK_ONLY

    def send(self, to: str, body: str) -> DeliveryResult:
        logger.info(
            "[SIMULATED SMS]",
            extra={"to": to, "body": body}
        )
        return DeliveryResult(delivered=False, mode=self.mode)


def create_message_transport(settings: AppSettings) -> MessageTransport:
    """
    Factory function selecting the transport from configuration.

    Returns:
        MessageTransport: Live Twilio transport when fully configured,
        deep-link-only transport otherwise
    """
    if settings.twilio.is_complete:
        return TwilioTransport(settings.twilio)

    logger.info("Twilio NOT configured, contact relay will return deep links only")
    return DeepLinkOnlyTransport()
