# SPDX-License-Identifier: Apache-2.0

"""
Application settings loaded from the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from domain.exceptions import ConfigurationError
from models.enums import PhoneExposure

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "raktasewa"
DEFAULT_PORT = 5000


@dataclass
class MongoPoolConfig:
    """MongoDB connection pool settings."""
    max_pool_size: int = 10
    min_pool_size: int = 1
    max_idle_time_ms: int = 30000
    server_selection_timeout_ms: int = 5000


@dataclass
class TwilioConfig:
    """SMS provider credentials and sender identity."""
    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    from_number: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)


@dataclass
class AppSettings:
    """Runtime configuration for the donor directory API."""
    mongodb_uri: str
    database_name: Optional[str] = None
    port: int = DEFAULT_PORT
    environment: str = "development"
    phone_exposure: PhoneExposure = PhoneExposure.EXPOSE
    sms_brand: str = "RaktaSewa"
    twilio: TwilioConfig = field(default_factory=TwilioConfig)
    mongo_pool: MongoPoolConfig = field(default_factory=MongoPoolConfig)
    otel_enabled: bool = True
    cors_origins: List[str] = field(default_factory=list)

    @property
    def debug(self) -> bool:
        return self.environment == "development"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def parse_phone_exposure(value: Optional[str], legacy_flag: Optional[str] = None) -> PhoneExposure:
    """
    Resolve the phone exposure policy.

    ``PHONE_EXPOSURE`` takes precedence; the older ``EXPOSE_PHONE=true|false``
    flag is honoured when it is unset.
    """
    if value:
        try:
            return PhoneExposure(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"PHONE_EXPOSURE must be one of: {', '.join(p.value for p in PhoneExposure)}"
            )
    if legacy_flag is not None and legacy_flag.strip().lower() == "false":
        return PhoneExposure.MASK_ONLY
    return PhoneExposure.EXPOSE


def _default_cors_origins(environment: str) -> List[str]:
    origins = []
    if environment == "development":
        origins.extend([
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ])
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        origins.append(frontend_url)
    custom_origins = os.getenv("CORS_ALLOWED_ORIGINS")
    if custom_origins:
        origins.extend(o.strip() for o in custom_origins.split(",") if o.strip())
    return origins


def load_settings() -> AppSettings:
    """
    Build settings from environment variables.

    Raises:
        ConfigurationError: If MONGODB_URI is missing or a value is invalid
    """
    mongodb_uri = os.getenv("MONGODB_URI", "").strip()
    if not mongodb_uri:
        raise ConfigurationError("MONGODB_URI is required")

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        port = int(os.getenv("PORT", str(DEFAULT_PORT)))
        mongo_pool = MongoPoolConfig(
            max_pool_size=int(os.getenv("MONGODB_MAX_POOL_SIZE", "10")),
            min_pool_size=int(os.getenv("MONGODB_MIN_POOL_SIZE", "1")),
            max_idle_time_ms=int(os.getenv("MONGODB_MAX_IDLE_TIME_MS", "30000")),
            server_selection_timeout_ms=int(os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "5000"))
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}")

    settings = AppSettings(
        mongodb_uri=mongodb_uri,
        database_name=os.getenv("DB_NAME") or os.getenv("MONGODB_DATABASE") or None,
        port=port,
        environment=environment,
        phone_exposure=parse_phone_exposure(os.getenv("PHONE_EXPOSURE"), os.getenv("EXPOSE_PHONE")),
        sms_brand=os.getenv("SMS_BRAND", "RaktaSewa"),
        twilio=TwilioConfig(
            account_sid=os.getenv("TWILIO_SID") or None,
            auth_token=os.getenv("TWILIO_TOKEN") or None,
            from_number=os.getenv("TWILIO_FROM") or None
        ),
        mongo_pool=mongo_pool,
        otel_enabled=_env_flag("OTEL_ENABLED", "true"),
        cors_origins=_default_cors_origins(environment)
    )

    logger.info(
        "Settings loaded",
        extra={
            "environment": settings.environment,
            "phone_exposure": settings.phone_exposure.value,
            "sms_configured": settings.twilio.is_complete
        }
    )
    return settings
