# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the donor directory.
"""

from enum import Enum


class BloodGroup(str, Enum):
    """ABO/Rh blood groups accepted for donor registration."""
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class PhoneExposure(str, Enum):
    """
    Policy for returning raw donor phone numbers to clients.

    MASK_ONLY must be active for the contact relay to keep donor numbers
    private; under EXPOSE any client can read them from the listing.
    """
    EXPOSE = "expose"
    MASK_ONLY = "mask-only"


class TransportMode(str, Enum):
    """Delivery strategy selected for the contact relay."""
    LIVE = "live"
    DEEP_LINK_ONLY = "deep-link-only"
