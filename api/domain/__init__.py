# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the donor directory.

This package contains pure business logic: phone policy, listing filters,
response shaping and relay message composition.
"""
