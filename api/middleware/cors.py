# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
CORS (Cross-Origin Resource Sharing) middleware for the donor directory UI.
Answers preflight requests and adds CORS headers to API responses.
"""

from flask import Flask, current_app, request
from typing import List, Optional
import os
import logging
from fnmatch import fnmatchcase

logger = logging.getLogger(__name__)


class CORSMiddleware:
    """CORS middleware for Flask applications."""

    def __init__(
        self,
        app: Flask,
        allowed_origins: Optional[List[str]] = None,
        allowed_methods: Optional[List[str]] = None,
        allowed_headers: Optional[List[str]] = None,
        expose_headers: Optional[List[str]] = None,
        allow_credentials: bool = False,
        max_age: int = 86400  # 24 hours
    ):
        """
        Initialize CORS middleware.

        Args:
            app: Flask application
            allowed_origins: List of allowed origins
            allowed_methods: List of allowed HTTP methods
            allowed_headers: List of allowed headers
            expose_headers: List of headers to expose to client
            allow_credentials: Whether to allow credentials
            max_age: Preflight cache duration in seconds
        """
        self.app = app
        self.allowed_origins = allowed_origins if allowed_origins is not None else []
        self.allowed_methods = allowed_methods or ['GET', 'POST', 'DELETE', 'OPTIONS']
        self.allowed_headers = allowed_headers or [
            'Accept',
            'Content-Type',
            'X-Requested-With',
            'X-Request-ID'
        ]
        self.expose_headers = expose_headers or [
            'Content-Length',
            'Content-Type',
            'X-Trace-Id'
        ]
        self.allow_credentials = allow_credentials
        self.max_age = max_age

        self.register_cors_handlers()

    def is_origin_allowed(self, origin: str) -> bool:
        """
        Check if origin is allowed.

        Args:
            origin: Request origin

        Returns:
            True if origin is allowed
        """
        if not origin:
            return False

        if os.getenv('CORS_ALLOW_ALL_ORIGINS', 'false').lower() == 'true':
            return True

        # Check exact matches
        if origin in self.allowed_origins:
            return True

        # Check wildcard patterns
        for allowed_origin in self.allowed_origins:
            if allowed_origin == '*':
                return True
            if '*' in allowed_origin and fnmatchcase(origin, allowed_origin):
                return True

        return False

    def add_cors_headers(self, response, origin: Optional[str] = None):
        """
        Add CORS headers to response.

        Args:
            response: Flask response object
            origin: Request origin
        """
        if origin and self.is_origin_allowed(origin):
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers.add('Vary', 'Origin')
        elif '*' in self.allowed_origins:
            response.headers['Access-Control-Allow-Origin'] = '*'

        if self.allow_credentials:
            response.headers['Access-Control-Allow-Credentials'] = 'true'

        response.headers['Access-Control-Allow-Methods'] = ', '.join(self.allowed_methods)
        response.headers['Access-Control-Allow-Headers'] = ', '.join(self.allowed_headers)
        response.headers['Access-Control-Expose-Headers'] = ', '.join(self.expose_headers)
        response.headers['Access-Control-Max-Age'] = str(self.max_age)

        return response

    def register_cors_handlers(self):
        """Register CORS handlers with Flask application."""

        @self.app.before_request
        def handle_preflight():
            """Answer OPTIONS with 204, the route's Allow header and CORS headers."""
            if request.method != 'OPTIONS' or not request.path.startswith('/api/'):
                return None

            origin = request.headers.get('Origin')
            response = current_app.make_default_options_response()
            response.status_code = 204
            response.set_data(b'')
            self.add_cors_headers(response, origin)

            logger.debug(f"CORS preflight handled for origin: {origin}")
            return response

        @self.app.after_request
        def add_cors_headers_to_response(response):
            """Add CORS headers to allowed cross-origin responses."""
            origin = request.headers.get('Origin')

            if request.method == 'OPTIONS':
                return response

            if origin and self.is_origin_allowed(origin):
                self.add_cors_headers(response, origin)
            elif origin:
                logger.warning(f"CORS rejected for origin: {origin}")

            return response


def configure_cors(app: Flask, **kwargs) -> CORSMiddleware:
    """
    Configure CORS for Flask application.

    Args:
        app: Flask application
        **kwargs: CORS configuration options

    Returns:
        Configured CORSMiddleware instance
    """
    return CORSMiddleware(app, **kwargs)
