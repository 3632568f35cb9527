# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request validation middleware using Pydantic models.
Provides automatic request body and query validation with error formatting.
"""

from functools import wraps
from flask import request, jsonify
from typing import Type, Callable, Dict, Any, List
from pydantic import BaseModel, ValidationError
from opentelemetry import trace
import logging

from services.problems import ProblemFormatter

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


class ValidationMiddleware:
    """Middleware for request validation using Pydantic models."""

    def __init__(self, formatter: ProblemFormatter = None):
        self.formatter = formatter or ProblemFormatter()

    def format_validation_errors(self, validation_error: ValidationError) -> List[Dict[str, Any]]:
        """
        Format Pydantic validation errors for API response.

        Args:
            validation_error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        errors = []

        for error in validation_error.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input")
            })

        return errors

    @staticmethod
    def summarize(errors: List[Dict[str, Any]]) -> str:
        """One-line summary naming the offending fields."""
        missing = [e["field"] for e in errors if e["type"] == "missing"]
        if missing:
            return f"{', '.join(missing)} required"
        return "; ".join(f"{e['field']}: {e['message']}" for e in errors)

    def validate_json_body(self, model_class: Type[BaseModel]) -> Callable:
        """
        Decorator to validate JSON request body against Pydantic model.

        Args:
            model_class: Pydantic model class for validation

        Returns:
            Decorator function
        """
        def decorator(f: Callable) -> Callable:
            @wraps(f)
            def decorated_function(*args, **kwargs):
                with tracer.start_as_current_span("validation.validate_json_body") as span:
                    span.set_attributes({
                        "validation.model": model_class.__name__,
                        "http.method": request.method,
                        "http.path": request.path
                    })

                    json_data = request.get_json(silent=True)
                    if not isinstance(json_data, dict):
                        span.set_attribute("validation.result", "invalid_json")
                        error_response = self.formatter.format_validation_error(
                            "Request body must be a JSON object",
                            request.path,
                            [{
                                "field": "body",
                                "message": "Expected a JSON object",
                                "type": "json_error",
                                "input": None
                            }]
                        )
                        return jsonify(error_response), 400

                    # Validate against Pydantic model
                    try:
                        validated_data = model_class.model_validate(json_data)
                    except ValidationError as e:
                        span.set_attribute("validation.result", "validation_error")
                        validation_errors = self.format_validation_errors(e)

                        logger.warning(
                            "Request validation failed",
                            extra={
                                "model": model_class.__name__,
                                "path": request.path,
                                "method": request.method,
                                "errors": validation_errors
                            }
                        )

                        error_response = self.formatter.format_validation_error(
                            self.summarize(validation_errors),
                            request.path,
                            validation_errors
                        )
                        return jsonify(error_response), 400

                    span.set_attribute("validation.result", "success")
                    logger.debug(
                        "Request validation successful",
                        extra={
                            "model": model_class.__name__,
                            "path": request.path,
                            "method": request.method
                        }
                    )

                    # Pass validated data to route handler
                    return f(validated_data, *args, **kwargs)

            return decorated_function
        return decorator

    def validate_query_params(self, model_class: Type[BaseModel]) -> Callable:
        """
        Decorator to validate query parameters against Pydantic model.

        Args:
            model_class: Pydantic model class for validation

        Returns:
            Decorator function
        """
        def decorator(f: Callable) -> Callable:
            @wraps(f)
            def decorated_function(*args, **kwargs):
                with tracer.start_as_current_span("validation.validate_query_params") as span:
                    span.set_attributes({
                        "validation.model": model_class.__name__,
                        "http.method": request.method,
                        "http.path": request.path
                    })

                    query_data = request.args.to_dict()

                    try:
                        validated_params = model_class.model_validate(query_data)
                    except ValidationError as e:
                        span.set_attribute("validation.result", "validation_error")
                        validation_errors = self.format_validation_errors(e)

                        logger.warning(
                            "Query parameter validation failed",
                            extra={
                                "model": model_class.__name__,
                                "path": request.path,
                                "method": request.method,
                                "params": query_data,
                                "errors": validation_errors
                            }
                        )

                        error_response = self.formatter.format_validation_error(
                            self.summarize(validation_errors),
                            request.path,
                            validation_errors
                        )
                        return jsonify(error_response), 400

                    span.set_attribute("validation.result", "success")
                    return f(validated_params, *args, **kwargs)

            return decorated_function
        return decorator


def validate_json(model_class: Type[BaseModel], validation_middleware: ValidationMiddleware = None) -> Callable:
    """
    Convenience decorator for JSON body validation.

    Args:
        model_class: Pydantic model class
        validation_middleware: ValidationMiddleware instance

    Returns:
        Decorator function
    """
    return (validation_middleware or ValidationMiddleware()).validate_json_body(model_class)


def validate_query(model_class: Type[BaseModel], validation_middleware: ValidationMiddleware = None) -> Callable:
    """
    Convenience decorator for query parameter validation.

    Args:
        model_class: Pydantic model class
        validation_middleware: ValidationMiddleware instance

    Returns:
        Decorator function
    """
    return (validation_middleware or ValidationMiddleware()).validate_query_params(model_class)
