# reride/services/entitlement_service.py

from flask import current_app

from ..constants.plans import UNLIMITED, DEFAULT_PLAN_ID
from ..constants.service_code import ERROR_MESSAGES
from ..models.user_model import User
from ..models.vehicle_model import Vehicle
from ..utils.errors import NotFoundError, ConflictError
from ..utils.logger import Log
from .plan_service import PlanCatalog


class EntitlementService:
    """What a seller's plan allows versus what the seller has used."""

    def __init__(self, catalog: PlanCatalog):
        self.catalog = catalog

    def _get_seller(self, seller_email):
        seller = User.get_seller(seller_email)
        if not seller:
            raise NotFoundError(ERROR_MESSAGES["SELLER_NOT_FOUND"], seller_email=seller_email)
        return seller

    def _plan_for(self, seller):
        plan_id = seller.get("subscriptionPlan") or DEFAULT_PLAN_ID
        try:
            return self.catalog.get_plan(plan_id)
        except NotFoundError:
            # custom plan deleted after the seller subscribed
            Log.warning(f"[entitlement_service.py][_plan_for][{seller.get('email')}] plan {plan_id} no longer exists, using {DEFAULT_PLAN_ID}")
            return self.catalog.get_plan(DEFAULT_PLAN_ID)

    def get_entitlements(self, seller_email: str) -> dict:
        seller = self._get_seller(seller_email)
        plan = self._plan_for(seller)

        listing_limit = plan.get("listingLimit", 1)
        active_listings = Vehicle.count_active_by_seller(seller_email)
        listings_remaining = None
        if listing_limit != UNLIMITED:
            listings_remaining = max(int(listing_limit) - active_listings, 0)

        free_certifications = int(plan.get("freeCertifications", 0) or 0)
        used_certifications = int(seller.get("usedCertifications") or 0)

        return {
            "sellerEmail": seller_email,
            "planId": plan["id"],
            "planName": plan.get("name"),
            "listingLimit": listing_limit,
            "activeListings": active_listings,
            "listingsRemaining": listings_remaining,
            "featuredCredits": int(seller.get("featuredCredits") or 0),
            "freeCertifications": free_certifications,
            "usedCertifications": used_certifications,
            "certificationsRemaining": max(free_certifications - used_certifications, 0),
            "canCreateListing": listings_remaining is None or listings_remaining > 0,
        }

    def can_create_listing(self, seller_email: str) -> bool:
        return self.get_entitlements(seller_email)["canCreateListing"]

    def consume_featured_credit(self, seller_email: str) -> int:
        """Spend one featured credit, returning the new balance."""
        log_tag = f"[entitlement_service.py][consume_featured_credit][{seller_email}]"

        self._get_seller(seller_email)
        updated = User.consume_featured_credit(seller_email)
        if updated is None:
            Log.info(f"{log_tag} no featured credits left")
            raise ConflictError("You have no featured credits left.")

        balance = int(updated.get("featuredCredits") or 0)
        Log.info(f"{log_tag} credit used, {balance} left")
        return balance

    def use_certification(self, seller_email: str) -> int:
        """Count one free certified inspection against the plan, returning the number used."""
        log_tag = f"[entitlement_service.py][use_certification][{seller_email}]"

        seller = self._get_seller(seller_email)
        allowance = int(self._plan_for(seller).get("freeCertifications", 0) or 0)

        updated = User.use_certification(seller_email, allowance) if allowance > 0 else None
        if updated is None:
            Log.info(f"{log_tag} no free certifications left (allowance={allowance})")
            raise ConflictError("You have used all free certifications included in your plan.")

        used = int(updated.get("usedCertifications") or 0)
        Log.info(f"{log_tag} certification used, {used}/{allowance}")
        return used


def get_entitlement_service() -> EntitlementService:
    return current_app.extensions["entitlement_service"]
