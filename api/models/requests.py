# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from bson import ObjectId

from domain.phone import validate_phone
from .enums import BloodGroup


def _strip_optional(v):
    """Trim a value, mapping blank strings to None."""
    if v is None:
        return None
    v = str(v).strip()
    return v or None


class CreateDonorRequest(BaseModel):
    """Request model for registering a donor."""

    model_config = ConfigDict(
        use_enum_values=True,
        str_strip_whitespace=True
    )

    name: str = Field(..., min_length=1, max_length=200, description="Donor full name")
    blood_group: BloodGroup = Field(..., description="ABO/Rh blood group")
    phone: str = Field(..., min_length=1, description="International phone number, e.g. +9779801234567")
    district: str = Field(..., min_length=1, max_length=100, description="District")
    municipality: Optional[str] = Field(default="", max_length=100, description="Municipality")
    ward: Optional[str] = Field(default="", max_length=50, description="Ward")

    @field_validator('phone')
    @classmethod
    def validate_phone_number(cls, v):
        """Validate phone format."""
        return validate_phone(v)

    @field_validator('municipality', 'ward', mode='before')
    @classmethod
    def validate_optional_text(cls, v):
        """Treat null as empty and coerce numbers such as ward 5 to text."""
        if v is None:
            return ""
        return str(v)


class DonorQuery(BaseModel):
    """Query parameters for donor listing. Blank values impose no constraint."""

    blood_group: Optional[str] = Field(None, description="Exact blood group")
    district: Optional[str] = Field(None, description="Case-insensitive district substring")
    q: Optional[str] = Field(None, description="Case-insensitive substring of name, municipality or ward")

    @field_validator('blood_group', mode='before')
    @classmethod
    def validate_blood_group(cls, v):
        """Accept enum members, restoring a '+' decoded to a space in a query string."""
        if v is None or not str(v).strip():
            return None
        raw = str(v)
        value = raw.strip().upper()
        if raw.endswith(" ") and not value.endswith(("+", "-")):
            value = f"{value}+"
        valid = {group.value for group in BloodGroup}
        if value not in valid:
            raise ValueError(f"blood_group must be one of {', '.join(sorted(valid))}")
        return value

    @field_validator('district', 'q', mode='before')
    @classmethod
    def validate_text(cls, v):
        """Trim text filters."""
        return _strip_optional(v)


class ContactRequest(BaseModel):
    """Request model for relaying a message to a donor."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True
    )

    donor_id: str = Field(..., alias="donorId", min_length=1, description="Donor identifier")
    requester_name: str = Field(..., alias="requesterName", min_length=1, max_length=200,
                                description="Name of the person asking for blood")
    requester_phone: str = Field(..., alias="requesterPhone", min_length=1,
                                 description="Phone the donor can reply to")
    message: Optional[str] = Field(default="", max_length=500, description="Optional free text")

    @field_validator('donor_id')
    @classmethod
    def validate_donor_id(cls, v):
        """Validate donor identifier format."""
        if not ObjectId.is_valid(v):
            raise ValueError('Invalid donorId')
        return v

    @field_validator('message', mode='before')
    @classmethod
    def validate_message(cls, v):
        """Treat null as no message."""
        return "" if v is None else v


class DonorPath(BaseModel):
    """Path parameters for single-donor routes."""

    donor_id: str = Field(..., description="Donor identifier")
