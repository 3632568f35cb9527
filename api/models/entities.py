# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the donor directory.
"""

from typing import Any, Dict
from pydantic import Field, field_validator
from bson import ObjectId

from domain.phone import validate_phone
from .base import BaseEntity
from .enums import BloodGroup


class Donor(BaseEntity):
    """Registered blood donor."""

    name: str = Field(..., min_length=1, max_length=200, description="Donor full name")
    blood_group: BloodGroup = Field(..., description="ABO/Rh blood group")
    phone: str = Field(..., description="International phone number")
    district: str = Field(..., min_length=1, max_length=100, description="District")
    municipality: str = Field(default="", max_length=100, description="Municipality")
    ward: str = Field(default="", max_length=50, description="Ward")

    @field_validator('name', 'district')
    @classmethod
    def validate_required_text(cls, v):
        """Trim required text fields and reject blank values."""
        if not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()

    @field_validator('municipality', 'ward', mode='before')
    @classmethod
    def validate_optional_text(cls, v):
        """Trim optional text fields, treating null as empty."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator('phone')
    @classmethod
    def validate_phone_number(cls, v):
        """Validate phone format."""
        return validate_phone(v)

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document."""
        return {
            "_id": ObjectId(self.id),
            "name": self.name,
            "blood_group": self.blood_group,
            "phone": self.phone,
            "district": self.district,
            "municipality": self.municipality,
            "ward": self.ward,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Donor":
        """Build a donor from a stored MongoDB document."""
        return cls.model_construct(
            id=str(document["_id"]),
            name=document.get("name", ""),
            blood_group=document.get("blood_group"),
            phone=document.get("phone", ""),
            district=document.get("district", ""),
            municipality=document.get("municipality") or "",
            ward=document.get("ward") or "",
            created_at=document.get("createdAt"),
            updated_at=document.get("updatedAt")
        )
