# SPDX-License-Identifier: Apache-2.0

"""
Middleware package for request processing.

This package contains middleware components for validation, error handling
and CORS in the donor directory API.
"""
