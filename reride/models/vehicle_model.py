# reride/models/vehicle_model.py

from ..extensions.db import db
from ..utils.errors import translate_store_errors


class Vehicle:
    """Read-only access to listings, used to measure a seller's listing usage."""

    collection_name = "vehicles"

    STATUS_PUBLISHED = "published"

    @classmethod
    @translate_store_errors
    def count_active_by_seller(cls, seller_email: str) -> int:
        col = db.get_collection(cls.collection_name)
        return col.count_documents({"sellerEmail": seller_email, "status": cls.STATUS_PUBLISHED})
