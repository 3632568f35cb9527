# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Contact relay endpoint.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
import logging

from middleware.validation import validate_json
from models.requests import ContactRequest
from models.responses import ContactResponse, ErrorResponse

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

contact_tag = Tag(name="Contact", description="Reach a donor without exposing their number")
contact_bp = APIBlueprint(
    'contact',
    __name__,
    url_prefix='/api/contact',
    abp_tags=[contact_tag]
)


@contact_bp.post('', responses={200: ContactResponse, 400: ErrorResponse, 404: ErrorResponse, 502: ErrorResponse})
@validate_json(ContactRequest)
def contact_donor(payload: ContactRequest):
    """
    Relay a blood request to a donor.

    With an SMS provider configured the donor receives the message directly
    and ``relayed`` is true. Without one, ``relayed`` is false and the
    returned ``sms:`` links let the requester's device send it. A provider
    failure is reported as 502.
    """
    outcome = current_app.contact_relay.relay(
        payload.donor_id,
        payload.requester_name,
        payload.requester_phone,
        payload.message
    )

    response = ContactResponse(
        ok=True,
        relayed=outcome.relayed,
        sms_link=outcome.sms_link,
        smsto_link=outcome.smsto_link
    )
    return jsonify(response.model_dump(by_alias=True))
