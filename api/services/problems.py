# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
RFC 7807 problem document formatting for error responses.
"""

from typing import Any, Dict, List, Optional

PROBLEM_BASE_URI = "https://raktasewa.org/problems"

TITLES = {
    "validation-error": "Validation Error",
    "resource-not-found": "Resource Not Found",
    "method-not-allowed": "Method Not Allowed",
    "resource-conflict": "Resource Conflict",
    "unsupported-media-type": "Unsupported Media Type",
    "internal-server-error": "Internal Server Error",
    "upstream-delivery-failed": "SMS Relay Failed",
    "service-unavailable": "Service Unavailable",
}


class ProblemFormatter:
    """Builds problem documents with a flat ``error`` field for simple clients."""

    def __init__(self, base_uri: str = PROBLEM_BASE_URI):
        self.base_uri = base_uri.rstrip("/")

    def build_error_response(
        self,
        error_type: str,
        title: str,
        status: int,
        detail: str,
        instance: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        extra: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build RFC 7807 compliant error response."""
        error_response = {
            'type': f"{self.base_uri}/{error_type}",
            'title': title,
            'status': status,
            'detail': detail,
            'instance': instance,
            'error': detail
        }

        if validation_errors:
            error_response['errors'] = validation_errors

        if extra:
            error_response.update(extra)

        return error_response

    def format(
        self,
        error_type: str,
        status: int,
        detail: str,
        instance: str,
        **kwargs
    ) -> Dict[str, Any]:
        """Format an error using the standard title for its type."""
        title = TITLES.get(error_type, "Error")
        return self.build_error_response(error_type, title, status, detail, instance, **kwargs)

    def format_validation_error(
        self,
        detail: str,
        instance: str,
        validation_errors: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Format a validation error response."""
        return self.format("validation-error", 400, detail, instance, validation_errors=validation_errors)

    def format_server_error(self, detail: str, instance: str) -> Dict[str, Any]:
        """Format a server error response."""
        return self.format("internal-server-error", 500, detail, instance)
