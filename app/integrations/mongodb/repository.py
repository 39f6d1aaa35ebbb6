"""
Knowledge Base Repository

Typed CRUD operations over the knowledge base collection:
- create: insert a new Q&A pair
- list: all entries, most recent first
- delete: remove an entry by id
- toggle_pin: flip the pinned flag of an entry

Every operation validates its inputs before touching the store. Blocking
pymongo calls run in a worker thread via asyncio.to_thread.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.integrations.mongodb.client import MongoStore
from app.models.knowledge import KnowledgeEntry, build_entry_document
from app.services.errors import (
    NotFoundFailure,
    StoreUnavailableFailure,
    ValidationFailure,
)
from app.utils import (
    normalize_tags,
    utc_now,
    validate_answer,
    validate_entry_id,
    validate_question,
    validate_tags,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Knowledge base item not found"


class KnowledgeRepository:
    """Knowledge base CRUD on top of an injected MongoStore."""

    def __init__(self, store: MongoStore):
        self.store = store

    async def create(
        self, question: Any, answer: Any, tags: Optional[Any] = None
    ) -> KnowledgeEntry:
        """
        Persist a new Q&A pair.

        Args:
            question: Question text (non-empty, at most 2000 characters)
            answer: Answer text (non-empty)
            tags: Optional list of tag strings

        Returns:
            The persisted entry with its generated id and timestamps

        Raises:
            ValidationFailure: If any input is invalid
            StoreUnavailableFailure: If the store cannot be reached
        """
        for is_valid, message in (
            validate_question(question),
            validate_answer(answer),
            validate_tags(tags),
        ):
            if not is_valid:
                raise ValidationFailure(message)

        document = build_entry_document(
            question=question.strip(),
            answer=answer,
            tags=normalize_tags(tags),
            now=utc_now(),
        )

        entry = await asyncio.to_thread(self._insert, document)
        logger.info(f"Created knowledge base entry {entry.id}")
        return entry

    async def list(self) -> List[KnowledgeEntry]:
        """
        Return all entries ordered by creation time, most recent first.

        Raises:
            StoreUnavailableFailure: If the store cannot be reached
        """
        documents = await asyncio.to_thread(self._find_all)
        logger.debug(f"Fetched {len(documents)} knowledge base entries")
        return [KnowledgeEntry.from_document(doc) for doc in documents]

    async def delete(self, entry_id: Any) -> None:
        """
        Delete an entry by id.

        Raises:
            ValidationFailure: If the id is empty
            NotFoundFailure: If no entry has this id
            StoreUnavailableFailure: If the store cannot be reached
        """
        object_id = self._parse_id(entry_id)

        deleted_count = await asyncio.to_thread(self._delete, object_id)
        if deleted_count == 0:
            raise NotFoundFailure(NOT_FOUND_MESSAGE)

        logger.info(f"Deleted knowledge base entry {entry_id}")

    async def toggle_pin(self, entry_id: Any) -> KnowledgeEntry:
        """
        Flip the pinned flag of an entry.

        The flip is computed by the store in a single update.

        Returns:
            The updated entry

        Raises:
            ValidationFailure: If the id is empty
            NotFoundFailure: If no entry has this id
            StoreUnavailableFailure: If the store cannot be reached
        """
        object_id = self._parse_id(entry_id)

        updated = await asyncio.to_thread(self._flip_pinned, object_id, utc_now())
        if updated is None:
            raise NotFoundFailure(NOT_FOUND_MESSAGE)

        entry = KnowledgeEntry.from_document(updated)
        logger.info(f"Entry {entry.id} pinned={entry.is_pinned}")
        return entry

    # ── blocking store calls (run in a worker thread) ─────────────────

    def _insert(self, document: Dict[str, Any]) -> KnowledgeEntry:
        collection = self.store.collection()
        try:
            result = collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to insert knowledge base entry: {e}")
            raise StoreUnavailableFailure(f"Failed to save entry: {e}") from e

        document["_id"] = result.inserted_id
        return KnowledgeEntry.from_document(document)

    def _find_all(self) -> List[Dict[str, Any]]:
        collection = self.store.collection()
        try:
            return list(
                collection.find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            )
        except PyMongoError as e:
            logger.error(f"Failed to list knowledge base entries: {e}")
            raise StoreUnavailableFailure(f"Failed to fetch entries: {e}") from e

    def _delete(self, object_id: ObjectId) -> int:
        collection = self.store.collection()
        try:
            return collection.delete_one({"_id": object_id}).deleted_count
        except PyMongoError as e:
            logger.error(f"Failed to delete knowledge base entry {object_id}: {e}")
            raise StoreUnavailableFailure(f"Failed to delete entry: {e}") from e

    def _flip_pinned(self, object_id: ObjectId, now: datetime) -> Optional[Dict[str, Any]]:
        collection = self.store.collection()
        try:
            return collection.find_one_and_update(
                {"_id": object_id},
                [
                    {
                        "$set": {
                            "isPinned": {"$not": "$isPinned"},
                            "updatedAt": now,
                        }
                    }
                ],
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to toggle pin for entry {object_id}: {e}")
            raise StoreUnavailableFailure(f"Failed to update entry: {e}") from e

    @staticmethod
    def _parse_id(entry_id: Any) -> ObjectId:
        is_valid, message = validate_entry_id(entry_id)
        if not is_valid:
            raise ValidationFailure(message)

        try:
            return ObjectId(entry_id.strip())
        except InvalidId:
            # No stored entry can have an id that isn't an ObjectId
            raise NotFoundFailure(NOT_FOUND_MESSAGE)
