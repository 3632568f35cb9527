"""
Health Check Service

Liveness probing for the database and a detailed status view covering
dependencies, the relay transport and process uptime.
"""

import os
import time
import psutil
from datetime import datetime
from typing import Dict, Any
from opentelemetry import trace

from config import AppSettings
from services.mongodb import MongoDBService
from services.sms import MessageTransport

tracer = trace.get_tracer(__name__)


class HealthCheckService:
    """Service for system health monitoring."""

    def __init__(self, mongodb_service: MongoDBService, transport: MessageTransport, settings: AppSettings):
        self.mongodb_service = mongodb_service
        self.transport = transport
        self.settings = settings
        self.service_version = "1.0.0"

    def check_liveness(self) -> Dict[str, Any]:
        """Ping the database. ``ok`` is False when it cannot be reached."""
        with tracer.start_as_current_span("health.liveness") as span:
            mongodb_health = self._check_mongodb_health()
            ok = mongodb_health["status"] == "healthy"
            span.set_attribute("health.ok", ok)

            if ok:
                return {"ok": True, "database": "up"}
            return {"ok": False, "database": "down", "error": mongodb_health.get("error")}

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status including dependencies and process metrics."""
        with tracer.start_as_current_span("health.status") as span:
            start_time = time.time()

            mongodb_health = self._check_mongodb_health()
            transport_health = self.transport.health_check()

            overall_status = "healthy" if mongodb_health["status"] == "healthy" else "unhealthy"
            response_time_ms = round((time.time() - start_time) * 1000, 2)

            span.set_attributes({
                "health.overall_status": overall_status,
                "health.response_time_ms": response_time_ms
            })

            return {
                "status": overall_status,
                "service": "donor-directory-api",
                "version": self.service_version,
                "environment": self.settings.environment,
                "timestamp": datetime.utcnow().isoformat() + "Z",
                "response_time_ms": response_time_ms,
                "uptime": self._get_uptime(),
                "dependencies": {
                    "mongodb": mongodb_health,
                    "sms": transport_health
                },
                "configuration": {
                    "phone_exposure": self.settings.phone_exposure.value,
                    "sms_transport": self.transport.mode.value,
                    "sms_relay_live": self.transport.is_live
                }
            }

    def _check_mongodb_health(self) -> Dict[str, Any]:
        """Check MongoDB connectivity."""
        with tracer.start_as_current_span("health.mongodb_check") as span:
            start_time = time.time()
            health = self.mongodb_service.health_check()
            health["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
            span.set_attribute("mongodb.status", health["status"])
            return health

    def _get_uptime(self) -> Dict[str, Any]:
        """Get process uptime information."""
        try:
            process = psutil.Process(os.getpid())
            create_time = process.create_time()
            return {
                "uptime_seconds": round(time.time() - create_time, 2),
                "started_at": datetime.utcfromtimestamp(create_time).isoformat() + "Z",
                "process_id": os.getpid()
            }
        except psutil.Error as e:
            return {"error": f"Failed to get uptime: {str(e)}"}
