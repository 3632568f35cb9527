# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for middleware functionality.
"""

import json
import pytest
from unittest.mock import Mock
from flask import Flask
from pydantic import BaseModel, Field
from werkzeug.exceptions import NotFound

from domain.exceptions import (
    ConflictException, NotFoundException, UpstreamDeliveryException, ValidationException
)
from middleware.validation import ValidationMiddleware, validate_json, validate_query
from middleware.error_handler import ErrorHandlerMiddleware
from middleware.cors import CORSMiddleware, configure_cors
from services.problems import ProblemFormatter


class SampleModel(BaseModel):
    title: str = Field(..., min_length=1)
    count: int = 1


class TestValidationMiddleware:
    """Test validation middleware functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = Flask(__name__)
        self.validation_middleware = ValidationMiddleware()

    def test_format_validation_errors(self):
        """Test formatting Pydantic validation errors."""
        errors = [
            {"loc": ("title",), "msg": "Field required", "type": "missing", "input": None},
            {"loc": ("count",), "msg": "Input should be a valid integer", "type": "int_parsing", "input": "x"}
        ]
        validation_error = Mock()
        validation_error.errors.return_value = errors

        result = self.validation_middleware.format_validation_errors(validation_error)

        assert len(result) == 2
        assert result[0]["field"] == "title"
        assert result[1]["input"] == "x"

    def test_summarize_missing_fields(self):
        """Test missing fields are named together."""
        errors = [
            {"field": "name", "message": "Field required", "type": "missing"},
            {"field": "phone", "message": "Field required", "type": "missing"}
        ]
        assert ValidationMiddleware.summarize(errors) == "name, phone required"

    def test_summarize_invalid_fields(self):
        """Test other errors are listed with their messages."""
        errors = [{"field": "phone", "message": "Value error, bad", "type": "value_error"}]
        assert ValidationMiddleware.summarize(errors) == "phone: Value error, bad"

    def test_validate_json_body_success(self):
        """Test the validated model is passed to the handler."""
        @self.app.route('/items', methods=['POST'])
        @validate_json(SampleModel)
        def create_item(payload):
            return {"title": payload.title, "count": payload.count}

        with self.app.test_client() as client:
            response = client.post('/items', json={"title": "a", "count": 3})

        assert response.status_code == 200
        assert json.loads(response.data) == {"title": "a", "count": 3}

    def test_validate_json_body_not_object(self):
        """Test JSON that is not an object."""
        @self.app.route('/items', methods=['POST'])
        @validate_json(SampleModel)
        def create_item(payload):
            return {}

        with self.app.test_client() as client:
            response = client.post('/items', json=["a"])

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["errors"][0]["field"] == "body"

    def test_validate_json_body_validation_error(self):
        """Test problem document for invalid input."""
        @self.app.route('/items', methods=['POST'])
        @validate_json(SampleModel)
        def create_item(payload):
            return {}

        with self.app.test_client() as client:
            response = client.post('/items', json={"count": 2})

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["title"] == "Validation Error"
        assert data["error"] == "title required"
        assert data["instance"] == "/items"

    def test_validate_query_params(self):
        """Test query parameter validation."""
        @self.app.route('/items')
        @validate_query(SampleModel)
        def list_items(params):
            return {"count": params.count}

        with self.app.test_client() as client:
            ok = client.get('/items?title=x&count=4')
            bad = client.get('/items?title=x&count=many')

        assert json.loads(ok.data) == {"count": 4}
        assert bad.status_code == 400


class TestErrorHandlerMiddleware:
    """Test error handler middleware functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = Flask(__name__)
        self.app.config['ENVIRONMENT'] = 'test'
        ErrorHandlerMiddleware(self.app)

    def _get(self, exc):
        @self.app.route('/boom')
        def boom():
            raise exc

        with self.app.test_client() as client:
            response = client.get('/boom')
        return response, json.loads(response.data)

    def test_not_found_exception(self):
        """Test custom 404."""
        response, data = self._get(NotFoundException("Donor not found"))

        assert response.status_code == 404
        assert data["type"] == "https://raktasewa.org/problems/resource-not-found"
        assert data["error"] == "Donor not found"

    def test_conflict_exception(self):
        """Test custom 409."""
        response, data = self._get(ConflictException("duplicate"))

        assert response.status_code == 409
        assert data["title"] == "Resource Conflict"

    def test_validation_exception_includes_errors(self):
        """Test field errors are carried."""
        response, data = self._get(ValidationException("bad id", [{"field": "id"}]))

        assert response.status_code == 400
        assert data["errors"] == [{"field": "id"}]

    def test_upstream_exception_extra_fields(self):
        """Test extra fields are merged into the problem document."""
        response, data = self._get(UpstreamDeliveryException("SMS relay failed.", "Authenticate"))

        assert response.status_code == 502
        assert data["details"] == "Authenticate"
        assert data["relayed"] is False

    def test_http_exception(self):
        """Test werkzeug client errors."""
        response, data = self._get(NotFound())

        assert response.status_code == 404
        assert data["status"] == 404

    def test_unexpected_error_details_outside_production(self):
        """Test exception class is shown outside production."""
        response, data = self._get(RuntimeError("kaboom"))

        assert response.status_code == 500
        assert data["detail"] == "RuntimeError: kaboom"

    def test_unexpected_error_hidden_in_production(self):
        """Test details are hidden in production."""
        self.app.config['ENVIRONMENT'] = 'production'
        response, data = self._get(RuntimeError("secret"))

        assert response.status_code == 500
        assert "secret" not in data["detail"]


class TestCORSMiddleware:
    """Test CORS middleware functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = Flask(__name__)

        @self.app.route('/api/things', methods=['GET', 'POST'])
        def things():
            return {"ok": True}

        self.cors = configure_cors(self.app, allowed_origins=['http://localhost:3000', 'https://*.example.org'])

    def test_origin_matching(self):
        """Test exact and wildcard origin checks."""
        assert isinstance(self.cors, CORSMiddleware)
        assert self.cors.is_origin_allowed('http://localhost:3000')
        assert self.cors.is_origin_allowed('https://app.example.org')
        assert not self.cors.is_origin_allowed('http://evil.test')
        assert not self.cors.is_origin_allowed('')

    def test_wildcard_patterns(self):
        """Test wildcards inside and at the end of a pattern."""
        cors = CORSMiddleware(Flask(__name__), allowed_origins=['https://*.example.org', 'http://localhost:*'])

        assert cors.is_origin_allowed('https://staging.example.org')
        assert cors.is_origin_allowed('http://localhost:5173')
        assert not cors.is_origin_allowed('http://app.example.org')
        assert not cors.is_origin_allowed('https://example.org.evil.test')

    def test_wildcard_origin_gets_headers(self):
        """Test a subdomain matched by pattern receives CORS headers."""
        with self.app.test_client() as client:
            response = client.get('/api/things', headers={'Origin': 'https://app.example.org'})

        assert response.headers['Access-Control-Allow-Origin'] == 'https://app.example.org'

    def test_preflight(self):
        """Test OPTIONS is answered with 204 and Allow."""
        with self.app.test_client() as client:
            response = client.options('/api/things', headers={'Origin': 'http://localhost:3000'})

        assert response.status_code == 204
        assert response.data == b''
        assert 'POST' in response.headers['Allow']
        assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:3000'

    def test_simple_request_from_allowed_origin(self):
        """Test headers on regular responses."""
        with self.app.test_client() as client:
            response = client.get('/api/things', headers={'Origin': 'http://localhost:3000'})

        assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:3000'

    def test_disallowed_origin(self):
        """Test no CORS headers for unknown origins."""
        with self.app.test_client() as client:
            response = client.get('/api/things', headers={'Origin': 'http://evil.test'})

        assert 'Access-Control-Allow-Origin' not in response.headers


class TestProblemFormatter:
    """Test problem document formatting."""

    def test_build_error_response(self):
        """Test the document fields."""
        formatter = ProblemFormatter("https://example.org/problems/")
        body = formatter.format("resource-not-found", 404, "missing", "/api/x")

        assert body == {
            "type": "https://example.org/problems/resource-not-found",
            "title": "Resource Not Found",
            "status": 404,
            "detail": "missing",
            "instance": "/api/x",
            "error": "missing"
        }
