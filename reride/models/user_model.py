# reride/models/user_model.py

from typing import Optional

from pymongo import ReturnDocument

from ..extensions.db import db
from ..constants.service_code import USER_ROLES
from ..utils.errors import translate_store_errors
from ..utils.helpers import utc_now_iso


class User:
    """
    Seller-relevant view of the `users` collection.

    Documents keep the field names shared with the admin console:
    email, name, role, subscriptionPlan, featuredCredits, usedCertifications,
    pendingPlanUpgrade (current payment request) and planUpgradeHistory
    (previously resolved requests, oldest first).

    Every write is a single conditional update_one/find_one_and_update on one
    document. The filter carries the state that was checked before the write,
    so a concurrent writer makes the update match nothing instead of being
    silently overwritten.
    """

    collection_name = "users"

    ROLE_SELLER = USER_ROLES["SELLER"]
    ROLE_ADMIN = USER_ROLES["ADMIN"]

    FIELD_PENDING_UPGRADE = "pendingPlanUpgrade"
    FIELD_UPGRADE_HISTORY = "planUpgradeHistory"

    # never leave the store through this model
    PROJECTION = {"password": 0}

    @classmethod
    def _collection(cls):
        return db.get_collection(cls.collection_name)

    @classmethod
    def _normalise(cls, doc: Optional[dict]) -> Optional[dict]:
        if not doc:
            return None
        doc = dict(doc)
        doc.pop("_id", None)
        return doc

    @classmethod
    def _zero_if_null(cls, query: dict, field: str):
        """Store 0 in a counter that is null or missing so $inc and $lt can apply to it."""
        cls._collection().update_one({**query, field: None}, {"$set": {field: 0}})

    # ---------------------------------------------------------
    # READS
    # ---------------------------------------------------------

    @classmethod
    @translate_store_errors
    def get_by_email(cls, email: str, role: Optional[str] = None) -> Optional[dict]:
        if not email:
            return None
        query = {"email": email}
        if role:
            query["role"] = role
        return cls._normalise(cls._collection().find_one(query, cls.PROJECTION))

    @classmethod
    def get_seller(cls, email: str) -> Optional[dict]:
        return cls.get_by_email(email, role=cls.ROLE_SELLER)

    @classmethod
    def is_admin(cls, email: str) -> bool:
        return cls.get_by_email(email, role=cls.ROLE_ADMIN) is not None

    @classmethod
    @translate_store_errors
    def get_by_payment_request_id(cls, request_id: str) -> Optional[dict]:
        if not request_id:
            return None
        doc = cls._collection().find_one(
            {f"{cls.FIELD_PENDING_UPGRADE}.id": request_id},
            cls.PROJECTION,
        )
        return cls._normalise(doc)

    @classmethod
    @translate_store_errors
    def list_sellers_by_request_status(cls, status: str) -> list:
        cursor = cls._collection().find(
            {
                f"{cls.FIELD_PENDING_UPGRADE}.status": status,
                "role": cls.ROLE_SELLER,
            },
            cls.PROJECTION,
        ).sort(f"{cls.FIELD_PENDING_UPGRADE}.requestedAt", 1)
        return [cls._normalise(doc) for doc in cursor]

    # ---------------------------------------------------------
    # PAYMENT REQUEST WRITES
    # ---------------------------------------------------------

    @classmethod
    @translate_store_errors
    def replace_payment_request(cls, email: str, previous: Optional[dict], new_request: dict) -> bool:
        """
        Put `new_request` in the seller's request slot, appending `previous`
        to the history in the same update.

        Only matches while the slot still holds `previous` (or is still empty),
        returns False otherwise.
        """
        query = {"email": email, "role": cls.ROLE_SELLER}
        update = {
            "$set": {
                cls.FIELD_PENDING_UPGRADE: new_request,
                "updatedAt": utc_now_iso(),
            }
        }

        if previous:
            query[f"{cls.FIELD_PENDING_UPGRADE}.id"] = previous.get("id")
            query[f"{cls.FIELD_PENDING_UPGRADE}.status"] = previous.get("status")
            update["$push"] = {cls.FIELD_UPGRADE_HISTORY: previous}
        else:
            query["$or"] = [
                {cls.FIELD_PENDING_UPGRADE: {"$exists": False}},
                {cls.FIELD_PENDING_UPGRADE: None},
            ]

        res = cls._collection().update_one(query, update)
        return res.matched_count == 1

    @classmethod
    @translate_store_errors
    def resolve_payment_request(
        cls,
        request_id: str,
        resolved_request: dict,
        subscription_plan: Optional[str] = None,
        featured_credit_grant: int = 0,
    ) -> Optional[dict]:
        """
        Write a resolved request back to its seller, only if it is still pending.

        On approval `subscription_plan` and `featured_credit_grant` are applied in
        the same update; the grant is added to the current balance.
        Returns the updated user, or None when nothing matched.
        """
        update = {
            "$set": {
                cls.FIELD_PENDING_UPGRADE: resolved_request,
                "updatedAt": utc_now_iso(),
            }
        }
        if subscription_plan:
            update["$set"]["subscriptionPlan"] = subscription_plan
            update["$inc"] = {"featuredCredits": int(featured_credit_grant or 0)}

        query = {
            f"{cls.FIELD_PENDING_UPGRADE}.id": request_id,
            f"{cls.FIELD_PENDING_UPGRADE}.status": "pending",
        }
        if subscription_plan:
            cls._zero_if_null(query, "featuredCredits")

        doc = cls._collection().find_one_and_update(
            query,
            update,
            projection=cls.PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        return cls._normalise(doc)

    # ---------------------------------------------------------
    # ENTITLEMENT WRITES
    # ---------------------------------------------------------

    @classmethod
    @translate_store_errors
    def consume_featured_credit(cls, email: str) -> Optional[dict]:
        """Take one featured credit if the balance is positive."""
        doc = cls._collection().find_one_and_update(
            {"email": email, "role": cls.ROLE_SELLER, "featuredCredits": {"$gt": 0}},
            {"$inc": {"featuredCredits": -1}, "$set": {"updatedAt": utc_now_iso()}},
            projection=cls.PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        return cls._normalise(doc)

    @classmethod
    @translate_store_errors
    def use_certification(cls, email: str, allowance: int) -> Optional[dict]:
        """Count one certification against `allowance` (must be > 0) if any is left."""
        query = {"email": email, "role": cls.ROLE_SELLER}
        cls._zero_if_null(query, "usedCertifications")

        doc = cls._collection().find_one_and_update(
            {**query, "usedCertifications": {"$lt": allowance}},
            {"$inc": {"usedCertifications": 1}, "$set": {"updatedAt": utc_now_iso()}},
            projection=cls.PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        return cls._normalise(doc)
