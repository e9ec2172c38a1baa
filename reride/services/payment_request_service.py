# reride/services/payment_request_service.py

from typing import Optional

from flask import current_app

from ..constants.service_code import ERROR_MESSAGES
from ..models.user_model import User
from ..utils.errors import (
    NotFoundError, ForbiddenError, PendingRequestExistsError, InvalidStateError
)
from ..utils.generators import generate_payment_request_id
from ..utils.helpers import utc_now_iso
from ..utils.logger import Log
from .plan_service import PlanCatalog


class PaymentRequestService:
    """
    Plan upgrade requests and their approval.

    Each seller carries at most one current request (`pendingPlanUpgrade`):

        (none) --submit--> pending --approve--> approved
                                   --reject---> rejected

    A resolved request is replaced by the next submit and kept in
    `planUpgradeHistory`. All writes are conditional on the state read
    just before, so racing writers get PendingRequestExistsError/InvalidStateError
    instead of overwriting each other.
    """

    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    SUMMARY_FIELDS = [
        "id", "planId", "amount", "planPrice", "status", "paymentProof", "paymentMethod",
        "transactionId", "requestedAt", "approvedAt", "approvedBy", "rejectedAt",
        "rejectedBy", "rejectionReason", "notes",
    ]

    def __init__(self, catalog: PlanCatalog):
        self.catalog = catalog

    # ---------------------------------------------------------
    # INTERNAL HELPERS
    # ---------------------------------------------------------

    @staticmethod
    def _require_admin(admin_email: str, log_tag: str):
        if not admin_email or not User.is_admin(admin_email):
            Log.info(f"{log_tag} {admin_email} is not an admin")
            raise ForbiddenError(ERROR_MESSAGES["ADMIN_REQUIRED"])

    def _load_pending(self, request_id: str, log_tag: str):
        seller = User.get_by_payment_request_id(request_id)
        current = (seller or {}).get(User.FIELD_PENDING_UPGRADE)
        if not current:
            Log.info(f"{log_tag} payment request not found")
            raise NotFoundError(ERROR_MESSAGES["PAYMENT_REQUEST_NOT_FOUND"], payment_request_id=request_id)

        if current.get("status") != self.STATUS_PENDING:
            Log.info(f"{log_tag} payment request already {current.get('status')}")
            raise InvalidStateError(
                ERROR_MESSAGES["PAYMENT_REQUEST_NOT_PENDING"],
                status=current.get("status"),
            )
        return seller, current

    def _write_resolution(self, request_id, resolved, log_tag, subscription_plan=None, featured_credit_grant=0):
        updated = User.resolve_payment_request(
            request_id,
            resolved,
            subscription_plan=subscription_plan,
            featured_credit_grant=featured_credit_grant,
        )
        if updated is None:
            # resolved or replaced by someone else between our read and write
            Log.warning(f"{log_tag} request changed concurrently, nothing written")
            raise InvalidStateError(ERROR_MESSAGES["PAYMENT_REQUEST_NOT_PENDING"])
        return updated

    # ---------------------------------------------------------
    # SELLER OPERATIONS
    # ---------------------------------------------------------

    def submit_request(
        self,
        seller_email: str,
        plan_id: str,
        amount: int,
        payment_proof: Optional[str] = None,
        payment_method: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> dict:
        log_tag = f"[payment_request_service.py][submit_request][{seller_email}][{plan_id}]"

        seller = User.get_seller(seller_email)
        if not seller:
            Log.info(f"{log_tag} seller not found")
            raise NotFoundError(ERROR_MESSAGES["SELLER_NOT_FOUND"], seller_email=seller_email)

        previous = seller.get(User.FIELD_PENDING_UPGRADE)
        if previous and previous.get("status") == self.STATUS_PENDING:
            Log.info(f"{log_tag} pending request {previous.get('id')} already exists")
            raise PendingRequestExistsError(ERROR_MESSAGES["PENDING_REQUEST_EXISTS"], payment_request_id=previous.get("id"))

        plan = self.catalog.get_plan(plan_id)
        plan_price = int(plan.get("price", 0) or 0)
        if int(amount) != plan_price:
            # kept for the admin to check against the payment proof
            Log.warning(f"{log_tag} amount {amount} differs from plan price {plan_price}")

        payment_request = {
            "id": generate_payment_request_id(),
            "sellerEmail": seller_email,
            "planId": plan["id"],
            "amount": int(amount),
            "planPrice": plan_price,
            "status": self.STATUS_PENDING,
            "requestedAt": utc_now_iso(),
        }
        if payment_proof is not None:
            payment_request["paymentProof"] = payment_proof
        if payment_method is not None:
            payment_request["paymentMethod"] = payment_method
        if transaction_id is not None:
            payment_request["transactionId"] = transaction_id

        if not User.replace_payment_request(seller_email, previous, payment_request):
            Log.warning(f"{log_tag} request slot changed concurrently, nothing written")
            raise PendingRequestExistsError(ERROR_MESSAGES["PENDING_REQUEST_EXISTS"])

        Log.info(f"{log_tag} payment request {payment_request['id']} created")
        return payment_request

    def get_status(self, seller_email: str) -> Optional[dict]:
        seller = User.get_seller(seller_email)
        if not seller:
            return None
        return seller.get(User.FIELD_PENDING_UPGRADE) or None

    def get_history(self, seller_email: str) -> list:
        """Every request the seller made, oldest first, the current one last."""
        seller = User.get_seller(seller_email)
        if not seller:
            raise NotFoundError(ERROR_MESSAGES["SELLER_NOT_FOUND"], seller_email=seller_email)

        history = list(seller.get(User.FIELD_UPGRADE_HISTORY) or [])
        current = seller.get(User.FIELD_PENDING_UPGRADE)
        if current:
            history.append(current)
        return history

    # ---------------------------------------------------------
    # ADMIN OPERATIONS
    # ---------------------------------------------------------

    def list_requests(self, admin_email: str, status: Optional[str] = None) -> list:
        status = status or self.STATUS_PENDING
        log_tag = f"[payment_request_service.py][list_requests][{admin_email}][{status}]"

        self._require_admin(admin_email, log_tag)

        summaries = []
        for seller in User.list_sellers_by_request_status(status):
            current = seller.get(User.FIELD_PENDING_UPGRADE)
            if not current:
                continue
            summary = {field: current.get(field) for field in self.SUMMARY_FIELDS}
            summary["sellerEmail"] = seller.get("email")
            summary["sellerName"] = seller.get("name")
            summaries.append(summary)

        Log.info(f"{log_tag} {len(summaries)} request(s)")
        return summaries

    def approve(self, request_id: str, admin_email: str, notes: Optional[str] = None) -> dict:
        log_tag = f"[payment_request_service.py][approve][{request_id}][{admin_email}]"

        self._require_admin(admin_email, log_tag)
        seller, current = self._load_pending(request_id, log_tag)

        plan = self.catalog.get_plan(current.get("planId"))
        grant = int(plan.get("featuredCredits", 0) or 0)

        resolved = {
            **current,
            "status": self.STATUS_APPROVED,
            "approvedAt": utc_now_iso(),
            "approvedBy": admin_email,
            "notes": notes,
        }

        updated = self._write_resolution(
            request_id,
            resolved,
            log_tag,
            subscription_plan=plan["id"],
            featured_credit_grant=grant,
        )

        Log.info(
            f"{log_tag} approved: {seller.get('email')} moved to {plan['id']}, "
            f"featuredCredits={updated.get('featuredCredits')} (+{grant})"
        )
        return resolved

    def reject(self, request_id: str, admin_email: str, rejection_reason: Optional[str] = None) -> dict:
        log_tag = f"[payment_request_service.py][reject][{request_id}][{admin_email}]"

        self._require_admin(admin_email, log_tag)
        seller, current = self._load_pending(request_id, log_tag)

        resolved = {
            **current,
            "status": self.STATUS_REJECTED,
            "rejectedAt": utc_now_iso(),
            "rejectedBy": admin_email,
            "rejectionReason": rejection_reason,
        }

        self._write_resolution(request_id, resolved, log_tag)

        Log.info(f"{log_tag} rejected request of {seller.get('email')}: {rejection_reason}")
        return resolved


def get_payment_request_service() -> PaymentRequestService:
    return current_app.extensions["payment_request_service"]
