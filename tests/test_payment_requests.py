import pytest

from reride.constants.plans import PLAN_DETAILS
from reride.models.user_model import User
from reride.utils.errors import (
    NotFoundError, ForbiddenError, ConflictError, InvalidStateError,
)

from .conftest import SELLER_EMAIL, ADMIN_EMAIL, CUSTOMER_EMAIL


def _seller(users):
    return users.find_one({"email": SELLER_EMAIL})


def test_submit_creates_pending_request(payment_service, users):
    payment_request = payment_service.submit_request(
        SELLER_EMAIL, "pro", 999, payment_proof="https://proof/1.png", payment_method="upi",
    )

    assert payment_request["id"].startswith("payment_")
    assert payment_request["status"] == "pending"
    assert payment_request["planPrice"] == PLAN_DETAILS["pro"]["price"]
    assert payment_request["paymentMethod"] == "upi"
    assert "transactionId" not in payment_request
    assert _seller(users)["pendingPlanUpgrade"] == payment_request


def test_submit_for_unknown_seller_or_plan_raises_not_found(payment_service, users):
    with pytest.raises(NotFoundError):
        payment_service.submit_request("nobody@x.com", "pro", 1999)
    with pytest.raises(NotFoundError):
        payment_service.submit_request(CUSTOMER_EMAIL, "pro", 1999)
    with pytest.raises(NotFoundError):
        payment_service.submit_request(SELLER_EMAIL, "custom_missing", 1999)

    assert "pendingPlanUpgrade" not in _seller(users)


def test_second_submit_while_pending_conflicts_and_keeps_original(payment_service, users):
    original = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    with pytest.raises(ConflictError):
        payment_service.submit_request(SELLER_EMAIL, "premium", 4999)

    assert _seller(users)["pendingPlanUpgrade"] == original


def test_submit_loses_race_when_slot_changed_after_read(payment_service, users, monkeypatch):
    # another submit lands between the read and the conditional write
    real_get_seller = User.get_seller

    def stale_get_seller(email):
        seller = real_get_seller(email)
        users.update_one(
            {"email": email},
            {"$set": {"pendingPlanUpgrade": {"id": "payment_other", "status": "pending"}}},
        )
        return seller

    monkeypatch.setattr(User, "get_seller", staticmethod(stale_get_seller))

    with pytest.raises(ConflictError):
        payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    assert _seller(users)["pendingPlanUpgrade"]["id"] == "payment_other"


def test_approve_grants_plan_and_adds_featured_credits(payment_service, users):
    users.update_one({"email": SELLER_EMAIL}, {"$set": {"featuredCredits": 3}})
    payment_request = payment_service.submit_request(SELLER_EMAIL, "premium", 4999)

    resolved = payment_service.approve(payment_request["id"], ADMIN_EMAIL, notes="paid in full")

    seller = _seller(users)
    assert resolved["status"] == "approved"
    assert resolved["approvedBy"] == ADMIN_EMAIL
    assert resolved["notes"] == "paid in full"
    assert seller["subscriptionPlan"] == "premium"
    assert seller["featuredCredits"] == 3 + PLAN_DETAILS["premium"]["featuredCredits"]
    assert seller["pendingPlanUpgrade"]["status"] == "approved"


def test_approve_uses_edited_plan_credits(payment_service, catalog, users):
    catalog.update_plan("pro", {"featuredCredits": 7})
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    payment_service.approve(payment_request["id"], ADMIN_EMAIL)

    assert _seller(users)["featuredCredits"] == 7


def test_reject_records_reason_and_leaves_entitlements(payment_service, users):
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    resolved = payment_service.reject(payment_request["id"], ADMIN_EMAIL, rejection_reason="invalid proof")

    seller = _seller(users)
    assert resolved["status"] == "rejected"
    assert resolved["rejectionReason"] == "invalid proof"
    assert resolved["rejectedBy"] == ADMIN_EMAIL
    assert seller["subscriptionPlan"] == "free"
    assert seller["featuredCredits"] == 0


@pytest.mark.parametrize("first, second", [
    ("approve", "approve"),
    ("approve", "reject"),
    ("reject", "approve"),
    ("reject", "reject"),
])
def test_resolved_requests_are_terminal(payment_service, users, first, second):
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    getattr(payment_service, first)(payment_request["id"], ADMIN_EMAIL)
    before = _seller(users)

    with pytest.raises(InvalidStateError):
        getattr(payment_service, second)(payment_request["id"], ADMIN_EMAIL)

    assert _seller(users) == before


def test_resolution_loses_race_when_request_resolved_after_read(payment_service, users, monkeypatch):
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    real_lookup = User.get_by_payment_request_id

    def lookup_then_reject(request_id):
        seller = real_lookup(request_id)
        users.update_one(
            {"pendingPlanUpgrade.id": request_id},
            {"$set": {"pendingPlanUpgrade.status": "rejected"}},
        )
        return seller

    monkeypatch.setattr(User, "get_by_payment_request_id", staticmethod(lookup_then_reject))

    with pytest.raises(InvalidStateError):
        payment_service.approve(payment_request["id"], ADMIN_EMAIL)

    seller = _seller(users)
    assert seller["subscriptionPlan"] == "free"
    assert seller["featuredCredits"] == 0


def test_unknown_request_id_raises_not_found(payment_service):
    with pytest.raises(NotFoundError):
        payment_service.approve("payment_missing", ADMIN_EMAIL)
    with pytest.raises(NotFoundError):
        payment_service.reject("payment_missing", ADMIN_EMAIL)


@pytest.mark.parametrize("actor", [SELLER_EMAIL, CUSTOMER_EMAIL, "ghost@x.com", ""])
def test_admin_operations_require_admin(payment_service, users, actor):
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    before = _seller(users)

    with pytest.raises(ForbiddenError):
        payment_service.list_requests(actor)
    with pytest.raises(ForbiddenError):
        payment_service.approve(payment_request["id"], actor)
    with pytest.raises(ForbiddenError):
        payment_service.reject(payment_request["id"], actor)

    assert _seller(users) == before


def test_list_requests_filters_by_status_and_adds_seller(payment_service, users):
    users.insert_one({"email": "t@x.com", "name": "Tia", "role": "seller"})
    first = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    second = payment_service.submit_request("t@x.com", "premium", 4999)
    payment_service.reject(second["id"], ADMIN_EMAIL, rejection_reason="blurry")

    pending = payment_service.list_requests(ADMIN_EMAIL)
    rejected = payment_service.list_requests(ADMIN_EMAIL, "rejected")

    assert [r["id"] for r in pending] == [first["id"]]
    assert pending[0]["sellerEmail"] == SELLER_EMAIL
    assert pending[0]["sellerName"] == "Sam Seller"
    assert [r["id"] for r in rejected] == [second["id"]]
    assert rejected[0]["rejectionReason"] == "blurry"


def test_get_status_returns_current_request_or_none(payment_service):
    assert payment_service.get_status(SELLER_EMAIL) is None
    assert payment_service.get_status("ghost@x.com") is None

    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    assert payment_service.get_status(SELLER_EMAIL) == payment_request


def test_resubmission_keeps_resolved_request_in_history(payment_service, users):
    first = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
    payment_service.reject(first["id"], ADMIN_EMAIL, rejection_reason="invalid proof")
    second = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    history = payment_service.get_history(SELLER_EMAIL)

    assert [r["id"] for r in history] == [first["id"], second["id"]]
    assert history[0]["status"] == "rejected"
    assert history[1]["status"] == "pending"
    assert _seller(users)["pendingPlanUpgrade"]["id"] == second["id"]


def test_history_for_unknown_seller_raises_not_found(payment_service):
    with pytest.raises(NotFoundError):
        payment_service.get_history("ghost@x.com")


def test_scenario_upgrade_from_free_to_pro(payment_service, users):
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 999)
    assert payment_request["status"] == "pending"

    resolved = payment_service.approve(payment_request["id"], ADMIN_EMAIL)

    seller = _seller(users)
    assert resolved["status"] == "approved"
    assert resolved["notes"] is None
    assert seller["subscriptionPlan"] == "pro"
    assert seller["featuredCredits"] == 0 + PLAN_DETAILS["pro"]["featuredCredits"]


def test_credits_accumulate_across_approvals(payment_service, users):
    for _ in range(2):
        payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)
        payment_service.approve(payment_request["id"], ADMIN_EMAIL)

    assert _seller(users)["featuredCredits"] == 2 * PLAN_DETAILS["pro"]["featuredCredits"]


@pytest.mark.parametrize("clear", [{"$set": {"featuredCredits": None}}, {"$unset": {"featuredCredits": ""}}])
def test_approve_treats_missing_credit_balance_as_zero(payment_service, users, clear):
    users.update_one({"email": SELLER_EMAIL}, clear)
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    payment_service.approve(payment_request["id"], ADMIN_EMAIL)

    seller = _seller(users)
    assert seller["subscriptionPlan"] == "pro"
    assert seller["featuredCredits"] == PLAN_DETAILS["pro"]["featuredCredits"]


def test_reject_leaves_null_credit_balance_untouched(payment_service, users):
    users.update_one({"email": SELLER_EMAIL}, {"$set": {"featuredCredits": None}})
    payment_request = payment_service.submit_request(SELLER_EMAIL, "pro", 1999)

    payment_service.reject(payment_request["id"], ADMIN_EMAIL)

    assert _seller(users)["featuredCredits"] is None
