# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB service layer with lazy, process-wide connection pooling.
"""

import logging
import threading
from typing import Dict, Optional, Any
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError, ConfigurationError

from config import DEFAULT_DATABASE, MongoPoolConfig

logger = logging.getLogger(__name__)


class MongoDBService:
    """
    MongoDB connection pool handle.

    Built once at application start and passed to whatever needs the
    database. The client is created on first use and then reused for the
    lifetime of the process.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: Optional[str] = None,
        pool_config: Optional[MongoPoolConfig] = None
    ):
        """Initialize MongoDB service without connecting."""
        self.connection_string = connection_string
        self._database_name = database_name
        self.pool_config = pool_config or MongoPoolConfig()
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
        self._lock = threading.Lock()

        logger.info("MongoDB service initialized")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client, connecting on first access."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    try:
                        client = MongoClient(
                            self.connection_string,
                            maxPoolSize=self.pool_config.max_pool_size,
                            minPoolSize=self.pool_config.min_pool_size,
                            maxIdleTimeMS=self.pool_config.max_idle_time_ms,
                            serverSelectionTimeoutMS=self.pool_config.server_selection_timeout_ms,
                            retryWrites=True,
                            retryReads=True
                        )
                        # Test connection
                        client.admin.command('ping')
                        self._client = client
                        logger.info("MongoDB connection established successfully")
                    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                        logger.error(f"Failed to connect to MongoDB: {e}")
                        raise

        return self._client

    @property
    def database_name(self) -> str:
        """Explicit override, else the database named in the URI, else the default."""
        if self._database_name:
            return self._database_name
        try:
            return self.client.get_default_database().name
        except ConfigurationError:
            return DEFAULT_DATABASE

    @property
    def database(self) -> Database:
        """Get MongoDB database."""
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """Get MongoDB collection."""
        return self.database[collection_name]

    def close_connection(self) -> None:
        """Close MongoDB connection."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None
                self._database = None
                logger.info("MongoDB connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            # Ping the database
            result = self.client.admin.command('ping')

            return {
                'status': 'healthy',
                'ping': result.get('ok') == 1,
                'database': self.database_name,
                'connection_pool_size': self.pool_config.max_pool_size
            }
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e)
            }
