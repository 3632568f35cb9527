# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for phone validation and masking.
"""

import pytest

from domain.phone import (
    mask_phone, normalize_phone, validate_phone, describe_phone_rule, HIDDEN
)


class TestMaskPhone:
    """Test phone masking."""

    def test_mask_keeps_first_two_and_last_digit(self):
        """Test masking an international number."""
        assert mask_phone("+9779812345678") == "97" + "*" * 10 + "8"

    def test_mask_ignores_formatting_characters(self):
        """Test that separators do not count as digits."""
        assert mask_phone("+977 981-234-5678") == mask_phone("+9779812345678")

    def test_short_number_is_hidden(self):
        """Test numbers with fewer than four digits."""
        assert mask_phone("12") == HIDDEN
        assert mask_phone("+123") == HIDDEN
        assert mask_phone("") == HIDDEN
        assert mask_phone(None) == HIDDEN

    def test_four_digit_number(self):
        """Test the shortest maskable number."""
        assert mask_phone("1234") == "12*4"

    def test_masked_value_never_contains_middle_digits(self):
        """Test that only three digits survive masking."""
        masked = mask_phone("+15005550006")
        assert sum(ch.isdigit() for ch in masked) == 3
        assert len(masked) == 11


class TestValidatePhone:
    """Test the canonical phone rule."""

    def test_valid_international_number(self):
        """Test a plain international number."""
        assert validate_phone("+15005550006") == "+15005550006"

    def test_normalizes_spaces_and_hyphens(self):
        """Test separators are removed before validation."""
        assert validate_phone("  +1 500-555-0006 ") == "+15005550006"
        assert normalize_phone(" +977 98-1234 5678") == "+9779812345678"

    def test_missing_plus_rejected(self):
        """Test numbers without a country code prefix."""
        with pytest.raises(ValueError):
            validate_phone("9779812345678")

    def test_too_short_and_too_long_rejected(self):
        """Test digit count bounds."""
        assert validate_phone("+1234567") == "+1234567"
        assert validate_phone("+123456789012345") == "+123456789012345"
        for phone in ("+123456", "+1234567890123456"):
            with pytest.raises(ValueError):
                validate_phone(phone)

    def test_letters_rejected(self):
        """Test non-digit characters."""
        with pytest.raises(ValueError):
            validate_phone("+97798ABCDEFGH")

    def test_nepal_mobile_rule(self):
        """Test Nepal numbers must be 97x/98x mobiles."""
        assert validate_phone("+9779812345678") == "+9779812345678"
        assert validate_phone("+9779712345678") == "+9779712345678"
        for phone in ("+9771234567", "+97798123456789"):
            with pytest.raises(ValueError, match="Nepal"):
                validate_phone(phone)

    def test_rule_description(self):
        """Test the published rule matches the enforced one."""
        rule = describe_phone_rule()
        assert rule["pattern"] == r"^\+\d{7,15}$"
        assert rule["nepal_prefix"] == "+977"
