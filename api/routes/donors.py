# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Donor endpoints: list with filters, register and delete.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
import logging

from domain import donors as donor_domain
from middleware.validation import validate_json, validate_query
from models.entities import Donor
from models.requests import CreateDonorRequest, DonorQuery, DonorPath
from models.responses import DonorResponse, ErrorResponse

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# Create API blueprint
donors_tag = Tag(name="Donors", description="Donor registration and search")
donors_bp = APIBlueprint(
    'donors',
    __name__,
    url_prefix='/api/donors',
    abp_tags=[donors_tag]
)


@donors_bp.get('')
@validate_query(DonorQuery)
def list_donors(params: DonorQuery):
    """
    List donors, newest first.

    Filters are optional: exact ``blood_group``, case-insensitive ``district``
    substring, and ``q`` matched against name, municipality and ward.
    ``phone`` is included only when the server exposes raw numbers.
    """
    with tracer.start_as_current_span(
        "donors.list",
        attributes={
            "filters.blood_group": params.blood_group or "",
            "filters.district": params.district or "",
            "filters.q": (params.q or "")[:50]
        }
    ) as span:
        filters = donor_domain.DonorFilters(
            blood_group=params.blood_group,
            district=params.district,
            q=params.q
        )
        query = donor_domain.build_donor_filter(filters)

        with tracer.start_as_current_span("db.donors.find") as db_span:
            donors = current_app.donor_store.list(query)
            db_span.set_attributes({
                "db.collection": current_app.donor_store.collection_name,
                "db.operation": "find",
                "db.returned_count": len(donors)
            })

        exposure = current_app.settings.phone_exposure
        span.set_attribute("donors.count", len(donors))
        return jsonify([donor_domain.serialize_donor(donor, exposure) for donor in donors])


@donors_bp.post('', responses={201: DonorResponse, 400: ErrorResponse, 409: ErrorResponse})
@validate_json(CreateDonorRequest)
def create_donor(payload: CreateDonorRequest):
    """
    Register a donor.

    Returns 409 when the phone number is already registered in the district.
    """
    with tracer.start_as_current_span(
        "donors.create",
        attributes={"donor.blood_group": payload.blood_group, "donor.district": payload.district}
    ) as span:
        donor = Donor(**payload.model_dump())

        with tracer.start_as_current_span("db.donors.insert"):
            created = current_app.donor_store.create(donor)

        span.set_attribute("donor.id", created.id)
        logger.info(
            "Donor registered",
            extra={"donor_id": created.id, "district": created.district}
        )

        exposure = current_app.settings.phone_exposure
        return jsonify(donor_domain.serialize_donor(created, exposure)), 201


@donors_bp.delete('/<donor_id>', responses={204: None, 400: ErrorResponse})
def delete_donor(path: DonorPath):
    """
    Delete a donor.

    Always 204 for a well-formed id, whether or not the donor existed.
    """
    with tracer.start_as_current_span(
        "donors.delete",
        attributes={"donor.id": path.donor_id}
    ):
        current_app.donor_store.delete(path.donor_id)
        return '', 204
