# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the donor directory.
"""

# Base models
from .base import BaseEntity

# Enumerations
from .enums import BloodGroup, PhoneExposure, TransportMode

# Core entities
from .entities import Donor

# Request models
from .requests import CreateDonorRequest, DonorQuery, ContactRequest, DonorPath

# Response models
from .responses import DonorResponse, ContactResponse, HealthCheckResponse, ErrorResponse

__all__ = [
    # Base models
    "BaseEntity",

    # Enumerations
    "BloodGroup",
    "PhoneExposure",
    "TransportMode",

    # Core entities
    "Donor",

    # Request models
    "CreateDonorRequest",
    "DonorQuery",
    "ContactRequest",
    "DonorPath",

    # Response models
    "DonorResponse",
    "ContactResponse",
    "HealthCheckResponse",
    "ErrorResponse"
]
