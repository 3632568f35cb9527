# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Health, status and client metadata endpoints.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag

from domain.phone import describe_phone_rule
from models.enums import BloodGroup
from models.responses import HealthCheckResponse

system_tag = Tag(name="Health", description="System health and status")
system_bp = APIBlueprint(
    'system',
    __name__,
    url_prefix='/api',
    abp_tags=[system_tag]
)


@system_bp.get('/health', responses={200: HealthCheckResponse, 503: HealthCheckResponse})
def health_check():
    """Liveness and database connectivity probe."""
    health = current_app.health_service.check_liveness()
    return jsonify(health), 200 if health["ok"] else 503


@system_bp.get('/ping')
def ping():
    """Connectivity probe that also reports whether a database URI is configured."""
    health = current_app.health_service.check_liveness()
    body = {"ok": health["ok"], "env": bool(current_app.settings.mongodb_uri)}
    if not health["ok"]:
        body["error"] = health.get("error")
        return jsonify(body), 500
    return jsonify(body)


@system_bp.get('/status')
def system_status():
    """Detailed status: dependencies, transport mode, exposure policy and uptime."""
    status = current_app.health_service.get_status()
    return jsonify(status), 200 if status["status"] == "healthy" else 503


@system_bp.get('/meta')
def client_metadata():
    """Blood groups and the phone rule, so form validation matches the server."""
    return jsonify({
        "blood_groups": [group.value for group in BloodGroup],
        "phone_rule": describe_phone_rule(),
        "phone_exposure": current_app.settings.phone_exposure.value
    })
