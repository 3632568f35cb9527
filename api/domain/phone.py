# SPDX-License-Identifier: Apache-2.0

"""
Phone number policy: normalisation, validation and display masking.

The rule applied to donor registration is also published to clients through
``GET /api/meta`` so form validation cannot drift from the server.
"""

import re
from typing import Dict

# International form: leading '+' then 7 to 15 digits
PHONE_PATTERN = re.compile(r"^\+\d{7,15}$")

# Numbers carrying the Nepal country code must be Nepal mobiles (97x / 98x)
NEPAL_PREFIX = "+977"
NEPAL_MOBILE_PATTERN = re.compile(r"^\+9779[78]\d{8}$")

_SEPARATORS = re.compile(r"[\s-]")
_NON_DIGITS = re.compile(r"\D")

HIDDEN = "hidden"


def normalize_phone(value: str) -> str:
    """Trim and drop the spaces and hyphens people type between digit groups."""
    return _SEPARATORS.sub("", str(value).strip())


def validate_phone(value: str) -> str:
    """
    Validate a phone number against the canonical rule.

    Args:
        value: Phone number as entered

    Returns:
        Normalised phone number

    Raises:
        ValueError: If the number does not satisfy the rule
    """
    phone = normalize_phone(value)
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number format, expected + followed by 7-15 digits")
    if phone.startswith(NEPAL_PREFIX) and not NEPAL_MOBILE_PATTERN.match(phone):
        raise ValueError("Nepal mobile numbers must look like +97798XXXXXXXX or +97797XXXXXXXX")
    return phone


def mask_phone(phone: str) -> str:
    """
    Partially redact a phone number for display.

    Keeps the first two and the last digit, e.g. ``+9779812345678`` becomes
    ``97**********8``. Fewer than four digits yields ``"hidden"``.
    """
    digits = _NON_DIGITS.sub("", str(phone or ""))
    if len(digits) < 4:
        return HIDDEN
    return f"{digits[:2]}{'*' * (len(digits) - 3)}{digits[-1]}"


def describe_phone_rule() -> Dict[str, str]:
    """Machine-readable form of the phone rule for clients."""
    return {
        "pattern": PHONE_PATTERN.pattern,
        "nepal_prefix": NEPAL_PREFIX,
        "nepal_mobile_pattern": NEPAL_MOBILE_PATTERN.pattern,
        "normalization": "trim, then remove spaces and hyphens"
    }
