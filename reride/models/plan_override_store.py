# reride/models/plan_override_store.py

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pymongo import ASCENDING

from ..extensions.db import db
from ..utils.errors import translate_store_errors


class PlanOverrideStore(ABC):
    """
    Key-value store holding partial plan attributes keyed by plan id.

    Built-in plans get an entry the first time an admin edits them; custom
    plans live here entirely. `list()` yields entries in insertion order.
    """

    @abstractmethod
    def get(self, plan_id: str) -> Optional[dict]:
        ...

    @abstractmethod
    def put(self, plan_id: str, value: dict) -> None:
        """Replace the stored attributes for `plan_id`, creating the entry if needed."""

    @abstractmethod
    def delete(self, plan_id: str) -> bool:
        ...

    @abstractmethod
    def list(self) -> List[Tuple[str, dict]]:
        ...


class InMemoryPlanOverrideStore(PlanOverrideStore):
    """
    Process-local store. Only valid when a single server process serves the
    catalog: other processes never see these writes.
    """

    def __init__(self, initial: Optional[Dict[str, dict]] = None):
        self._entries: Dict[str, dict] = {}
        for plan_id, value in (initial or {}).items():
            self.put(plan_id, value)

    def get(self, plan_id):
        value = self._entries.get(plan_id)
        return copy.deepcopy(value) if value is not None else None

    def put(self, plan_id, value):
        # dict keeps first insertion position on reassignment
        self._entries[plan_id] = copy.deepcopy(value)

    def delete(self, plan_id):
        return self._entries.pop(plan_id, None) is not None

    def list(self):
        return [(plan_id, copy.deepcopy(value)) for plan_id, value in self._entries.items()]


class MongoPlanOverrideStore(PlanOverrideStore):
    """
    Shared store backed by the `plan_overrides` collection.

    Documents look like {"_id": <plan id>, "attributes": {...}, "created_at": ..., "updated_at": ...}.
    `created_at` is only set on insert so list() keeps insertion order across edits.
    """

    collection_name = "plan_overrides"

    def _collection(self):
        return db.get_collection(self.collection_name)

    @translate_store_errors
    def get(self, plan_id):
        doc = self._collection().find_one({"_id": plan_id})
        return doc.get("attributes", {}) if doc else None

    @translate_store_errors
    def put(self, plan_id, value):
        now = datetime.utcnow()
        self._collection().update_one(
            {"_id": plan_id},
            {
                "$set": {"attributes": dict(value), "updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

    @translate_store_errors
    def delete(self, plan_id):
        res = self._collection().delete_one({"_id": plan_id})
        return res.deleted_count > 0

    @translate_store_errors
    def list(self):
        cursor = self._collection().find({}).sort([("created_at", ASCENDING), ("_id", ASCENDING)])
        return [(doc["_id"], doc.get("attributes", {})) for doc in cursor]


def build_plan_override_store(backend: str) -> PlanOverrideStore:
    if backend == "memory":
        return InMemoryPlanOverrideStore()
    return MongoPlanOverrideStore()
