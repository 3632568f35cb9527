# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Donor persistence on top of the shared MongoDB pool.

The (phone, district) uniqueness rule is a unique index, so concurrent
registrations are arbitrated by the database rather than by a
check-then-insert in the application.
"""

import logging
import threading
from typing import Dict, List, Optional, Any
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError
from bson import ObjectId
from bson.errors import InvalidId

from domain.exceptions import ConflictException, InternalException, ValidationException
from models.base import utcnow
from models.entities import Donor
from services.mongodb import MongoDBService

logger = logging.getLogger(__name__)

DONORS_COLLECTION = "donors"
PHONE_DISTRICT_INDEX = "phone_district_unique"


class DonorStore:
    """Donor collection access: create, list, get and delete."""

    def __init__(self, mongodb_service: MongoDBService, collection_name: str = DONORS_COLLECTION):
        self.mongodb_service = mongodb_service
        self.collection_name = collection_name
        self._indexes_ready = False
        self._lock = threading.Lock()

    @property
    def collection(self) -> Collection:
        """Donor collection, with indexes ensured on first access."""
        collection = self.mongodb_service.get_collection(self.collection_name)
        if not self._indexes_ready:
            with self._lock:
                if not self._indexes_ready:
                    self._create_indexes(collection)
                    self._indexes_ready = True
        return collection

    def ensure_indexes(self) -> None:
        """Create donor indexes now instead of on first access."""
        with self._lock:
            self._create_indexes(self.mongodb_service.get_collection(self.collection_name))
            self._indexes_ready = True

    def _create_indexes(self, collection: Collection) -> None:
        logger.info("Creating donor indexes...")
        collection.create_index(
            [("phone", ASCENDING), ("district", ASCENDING)],
            unique=True,
            name=PHONE_DISTRICT_INDEX
        )
        collection.create_index([("createdAt", DESCENDING)])
        logger.info("Donor indexes created successfully")

    @staticmethod
    def _validate_object_id(donor_id: str) -> ObjectId:
        """Validate and convert string ID to ObjectId."""
        try:
            return ObjectId(donor_id)
        except (InvalidId, TypeError):
            raise ValidationException(
                f"Invalid donor id: {donor_id}",
                [{"field": "id", "message": "Invalid ObjectId format", "type": "value_error", "input": donor_id}]
            )

    def create(self, donor: Donor) -> Donor:
        """
        Insert a donor in a single atomic write, stamping its timestamps.

        Raises:
            ConflictException: If the phone is already registered in the district
            InternalException: If the store cannot be reached
        """
        now = utcnow()
        donor.created_at = now
        donor.updated_at = now
        try:
            result = self.collection.insert_one(donor.to_document())
            logger.info(f"Created donor {result.inserted_id} in {self.collection_name}")
            return donor
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate donor rejected in {self.collection_name}: {e}")
            raise ConflictException("A donor with this phone already exists in this district")
        except PyMongoError as e:
            logger.error(f"Failed to create donor in {self.collection_name}: {e}")
            raise InternalException("Failed to create donor")

    def list(self, query: Optional[Dict[str, Any]] = None) -> List[Donor]:
        """Find donors matching a filter, most recently created first."""
        try:
            cursor = self.collection.find(query or {}).sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            donors = [Donor.from_document(doc) for doc in cursor]
            logger.debug(f"Found {len(donors)} donors in {self.collection_name}")
            return donors
        except PyMongoError as e:
            logger.error(f"Failed to list donors in {self.collection_name}: {e}")
            raise InternalException("Failed to fetch donors")

    def get(self, donor_id: str) -> Optional[Donor]:
        """Find a single donor by ID."""
        object_id = self._validate_object_id(donor_id)
        try:
            document = self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to find donor {donor_id}: {e}")
            raise InternalException("Failed to fetch donor")

        if document is None:
            logger.debug(f"Donor {donor_id} not found in {self.collection_name}")
            return None
        return Donor.from_document(document)

    def delete(self, donor_id: str) -> None:
        """Delete a donor by ID. Deleting an absent donor is a no-op."""
        object_id = self._validate_object_id(donor_id)
        try:
            result = self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete donor {donor_id}: {e}")
            raise InternalException("Failed to delete donor")

        if result.deleted_count:
            logger.info(f"Deleted donor {donor_id} from {self.collection_name}")
        else:
            logger.debug(f"No donor deleted for {donor_id} in {self.collection_name}")
