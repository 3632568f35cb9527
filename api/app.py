"""
Donor Directory API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support, wires the
MongoDB pool, donor store, SMS transport and contact relay into it, and
registers middleware and routes.
"""

from typing import Optional
from flask_openapi3 import OpenAPI, Info

from config import AppSettings, load_settings
from observability.config import setup_observability
from observability.middleware import add_observability_middleware
from middleware.cors import configure_cors
from middleware.error_handler import ErrorHandlerMiddleware
from services.contact_relay import ContactRelayService
from services.donor_store import DonorStore
from services.health import HealthCheckService
from services.mongodb import MongoDBService
from services.sms import MessageTransport, create_message_transport

# OpenAPI info
info = Info(
    title="Donor Directory API",
    version="1.0.0",
    description="Blood donor registration, search and private contact relay"
)


def create_app(
    settings: Optional[AppSettings] = None,
    mongodb_service: Optional[MongoDBService] = None,
    transport: Optional[MessageTransport] = None
) -> OpenAPI:
    """
    Application factory.

    The MongoDB pool and SMS transport are built here once and shared by
    every request through the app object. Either can be passed in, which is
    how tests substitute them.
    """
    settings = settings or load_settings()

    # Initialize observability first
    setup_observability(settings.environment, settings.otel_enabled)

    # Create Flask app with OpenAPI
    app = OpenAPI(__name__, info=info)

    # Add observability middleware
    add_observability_middleware(app)

    # Environment configuration
    app.config['ENVIRONMENT'] = settings.environment
    app.config['DEBUG'] = settings.debug
    app.config['JSON_SORT_KEYS'] = False

    # Initialize services
    mongodb_service = mongodb_service or MongoDBService(
        settings.mongodb_uri,
        settings.database_name,
        settings.mongo_pool
    )
    transport = transport or create_message_transport(settings)
    donor_store = DonorStore(mongodb_service)
    contact_relay = ContactRelayService(donor_store, transport, settings.sms_brand)
    health_service = HealthCheckService(mongodb_service, transport, settings)

    # Initialize middleware
    ErrorHandlerMiddleware(app)
    configure_cors(app, allowed_origins=settings.cors_origins)

    # Make services available to routes
    app.settings = settings
    app.mongodb_service = mongodb_service
    app.message_transport = transport
    app.donor_store = donor_store
    app.contact_relay = contact_relay
    app.health_service = health_service

    # Register routes
    from routes.donors import donors_bp
    from routes.contact import contact_bp
    from routes.system import system_bp

    app.register_api(donors_bp)
    app.register_api(contact_bp)
    app.register_api(system_bp)

    return app


if __name__ == '__main__':
    # Development server
    app = create_app()
    app.run(
        host='0.0.0.0',
        port=app.settings.port,
        debug=app.config['DEBUG']
    )
