# SPDX-License-Identifier: Apache-2.0

"""
Donor domain logic.

Pure functions for turning listing filters into store queries, shaping
donors for clients according to the phone exposure policy, and composing
contact relay messages and deep links.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

from models.entities import Donor
from models.enums import PhoneExposure
from .phone import mask_phone

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"

SEARCH_FIELDS = ("name", "municipality", "ward")


@dataclass
class DonorFilters:
    """Filters for donor queries. None means no constraint."""
    blood_group: Optional[str] = None
    district: Optional[str] = None
    q: Optional[str] = None


@dataclass
class RelayOutcome:
    """Result of a contact relay attempt."""
    relayed: bool
    body: str
    sms_link: str
    smsto_link: str


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _contains(value: str) -> Dict[str, str]:
    """Case-insensitive literal substring match."""
    return {"$regex": re.escape(value), "$options": "i"}


def build_donor_filter(filters: DonorFilters) -> Dict[str, Any]:
    """
    Build a MongoDB filter from listing filters.

    Args:
        filters: Requested filters; blank values are ignored

    Returns:
        MongoDB query document
    """
    query: Dict[str, Any] = {}

    blood_group = _clean(filters.blood_group)
    if blood_group:
        query["blood_group"] = blood_group

    district = _clean(filters.district)
    if district:
        query["district"] = _contains(district)

    search = _clean(filters.q)
    if search:
        query["$or"] = [{field: _contains(search)} for field in SEARCH_FIELDS]

    return query


def serialize_donor(donor: Donor, exposure: PhoneExposure) -> Dict[str, Any]:
    """Shape a donor for API responses, applying the phone exposure policy."""
    data = {
        "id": donor.id,
        "name": donor.name,
        "blood_group": donor.blood_group,
        "district": donor.district,
        "municipality": donor.municipality,
        "ward": donor.ward,
        "phone_masked": mask_phone(donor.phone),
        "created_at": donor.created_at.isoformat() + "Z" if donor.created_at else None,
        "updated_at": donor.updated_at.isoformat() + "Z" if donor.updated_at else None
    }
    if PhoneExposure(exposure) is PhoneExposure.EXPOSE:
        data["phone"] = donor.phone
    return data


def compose_contact_message(
    brand: str,
    requester_name: str,
    requester_phone: str,
    blood_group: str,
    message: Optional[str] = None
) -> str:
    """Compose the relayed SMS text."""
    body = f"{brand}: {requester_name} ({requester_phone}) is requesting blood ({blood_group})."
    if message:
        body += f' Msg: "{message}"'
    return body


def encode_uri_component(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_deep_links(phone: str, body: str) -> Dict[str, str]:
    """
    Build sms: deep links that open the device's SMS app pre-filled.

    Android reads ``?body=``, iOS variants expect ``&body=``.
    """
    encoded = encode_uri_component(body)
    return {
        "sms_link": f"sms:{phone}?body={encoded}",
        "smsto_link": f"sms:{phone}&body={encoded}"
    }
