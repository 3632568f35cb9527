# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class DonorResponse(BaseModel):
    """Donor as returned to clients. ``phone`` is present only under the expose policy."""

    id: str = Field(..., description="Donor ID")
    name: str = Field(..., description="Donor full name")
    blood_group: str = Field(..., description="Blood group")
    district: str = Field(..., description="District")
    municipality: str = Field(default="", description="Municipality")
    ward: str = Field(default="", description="Ward")
    phone_masked: str = Field(..., description="Partially redacted phone number")
    phone: Optional[str] = Field(None, description="Raw phone number")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class ContactResponse(BaseModel):
    """Contact relay outcome."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = Field(True, description="Request handled")
    relayed: bool = Field(..., description="Whether an SMS was delivered through the provider")
    sms_link: str = Field(..., alias="smsLink", description="Android-style sms: deep link")
    smsto_link: str = Field(..., alias="smstoLink", description="iOS-style sms: deep link")


class HealthCheckResponse(BaseModel):
    """Liveness probe response."""

    ok: bool = Field(..., description="Service and database reachable")
    database: Optional[str] = Field(None, description="Database status")
    error: Optional[str] = Field(None, description="Failure reason")


class ErrorResponse(BaseModel):
    """RFC 7807 problem document."""

    type: str = Field(..., description="Problem type URI")
    title: str = Field(..., description="Short summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(..., description="Request path")
    error: str = Field(..., description="Same as detail, for simple clients")
    errors: Optional[List[Dict[str, Any]]] = Field(None, description="Field validation errors")
