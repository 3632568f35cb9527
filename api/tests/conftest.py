# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest
from datetime import datetime, timedelta
from unittest.mock import MagicMock
from bson import ObjectId

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'

from config import AppSettings, TwilioConfig
from models.enums import PhoneExposure
from services.sms import DeepLinkOnlyTransport


@pytest.fixture
def settings():
    """Test settings: no SMS provider, raw phones exposed."""
    return AppSettings(
        mongodb_uri='mongodb://localhost:27017/donors_test',
        database_name='donors_test',
        environment='test',
        otel_enabled=False,
        cors_origins=['http://localhost:3000']
    )


@pytest.fixture
def mask_only_settings(settings):
    """Test settings with raw phone numbers hidden."""
    settings.phone_exposure = PhoneExposure.MASK_ONLY
    return settings


@pytest.fixture
def twilio_settings(settings):
    """Test settings with a complete SMS provider configuration."""
    settings.twilio = TwilioConfig(
        account_sid='ACtest',
        auth_token='token',
        from_number='+15005550006'
    )
    return settings


@pytest.fixture
def donors_collection():
    """Mock of the donors collection."""
    collection = MagicMock()
    collection.name = 'donors'
    collection.find.return_value.sort.return_value = []
    collection.find_one.return_value = None
    collection.delete_one.return_value = MagicMock(deleted_count=0)
    return collection


@pytest.fixture
def mock_mongodb(donors_collection):
    """Mock MongoDB service handing out the mock collection."""
    service = MagicMock()
    service.get_collection.return_value = donors_collection
    service.health_check.return_value = {
        'status': 'healthy',
        'ping': True,
        'database': 'donors_test',
        'connection_pool_size': 10
    }
    return service


@pytest.fixture
def transport():
    """Deep-link-only transport."""
    return DeepLinkOnlyTransport()


@pytest.fixture
def app_factory(mock_mongodb, transport):
    """Build applications wired to the mock database with chosen settings/transport."""
    from app import create_app

    def factory(app_settings, app_transport=None):
        application = create_app(
            settings=app_settings,
            mongodb_service=mock_mongodb,
            transport=app_transport or transport
        )
        application.config['TESTING'] = True
        return application

    return factory


@pytest.fixture
def app(app_factory, settings):
    """Application wired to mocks."""
    return app_factory(settings)


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


def make_donor_document(**overrides):
    """Stored donor document as MongoDB returns it."""
    now = datetime.utcnow()
    document = {
        "_id": ObjectId(),
        "name": "Ram Shrestha",
        "blood_group": "B+",
        "phone": "+9779812345678",
        "district": "Kathmandu",
        "municipality": "Kathmandu Metropolitan",
        "ward": "5",
        "createdAt": now,
        "updatedAt": now
    }
    document.update(overrides)
    return document


@pytest.fixture
def donor_document():
    """Sample stored donor."""
    return make_donor_document()


@pytest.fixture
def donor_documents():
    """Several stored donors, newest first."""
    now = datetime.utcnow()
    return [
        make_donor_document(
            name="Sita Karki", blood_group="O+", phone="+9779701234567",
            district="Lalitpur", municipality="", ward="",
            createdAt=now, updatedAt=now
        ),
        make_donor_document(
            createdAt=now - timedelta(minutes=5), updatedAt=now - timedelta(minutes=5)
        )
    ]


@pytest.fixture
def sample_donor_payload():
    """Valid registration payload."""
    return {
        "name": "Ram",
        "blood_group": "B+",
        "phone": "+9779812345678",
        "district": "Kathmandu"
    }
