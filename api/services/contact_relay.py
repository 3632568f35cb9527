# SPDX-License-Identifier: Apache-2.0

"""
Contact relay: lets a requester reach a donor without seeing their number.
"""

import logging
from typing import Optional

from opentelemetry import trace

from domain import donors as donor_domain
from domain.exceptions import NotFoundException, UpstreamDeliveryException
from services.donor_store import DonorStore
from services.sms import DeliveryError, MessageTransport

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ContactRelayService:
    """Composes the relay message and hands it to the configured transport."""

    def __init__(self, store: DonorStore, transport: MessageTransport, brand: str = "RaktaSewa"):
        self.store = store
        self.transport = transport
        self.brand = brand

    def relay(
        self,
        donor_id: str,
        requester_name: str,
        requester_phone: str,
        message: Optional[str] = None
    ) -> donor_domain.RelayOutcome:
        """
        Relay a blood request to a donor.

        Sends at most one SMS. A live transport failure is reported to the
        caller as is; it never falls back to deep links.

        Raises:
            ValidationException: If donor_id is malformed
            NotFoundException: If the donor does not exist
            UpstreamDeliveryException: If the SMS provider fails the send
        """
        with tracer.start_as_current_span(
            "contact.relay",
            attributes={"donor.id": donor_id, "transport.mode": self.transport.mode.value}
        ) as span:
            donor = self.store.get(donor_id)
            if donor is None:
                raise NotFoundException("Donor not found")

            body = donor_domain.compose_contact_message(
                self.brand,
                requester_name,
                requester_phone,
                donor.blood_group,
                message
            )

            try:
                result = self.transport.send(donor.phone, body)
            except DeliveryError as e:
                span.set_attribute("contact.relayed", False)
                raise UpstreamDeliveryException("SMS relay failed.", e.details)

            span.set_attribute("contact.relayed", result.delivered)
            links = donor_domain.build_deep_links(donor.phone, body)

            logger.info(
                "Contact request handled",
                extra={"donor_id": donor_id, "relayed": result.delivered, "mode": result.mode.value}
            )

            return donor_domain.RelayOutcome(
                relayed=result.delivered,
                body=body,
                sms_link=links["sms_link"],
                smsto_link=links["smsto_link"]
            )
