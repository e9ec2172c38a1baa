import pytest
from marshmallow import ValidationError

from reride.constants.plans import MAX_PLANS, PLAN_DETAILS, UNLIMITED
from reride.models.plan_id import BuiltInPlan, CustomPlanId, parse_plan_id
from reride.models.plan_override_store import InMemoryPlanOverrideStore
from reride.services.plan_service import PlanCatalog
from reride.utils.errors import NotFoundError, LimitExceededError


@pytest.fixture
def memory_catalog():
    return PlanCatalog(InMemoryPlanOverrideStore())


def test_parse_plan_id_classifies_built_in_and_custom():
    assert parse_plan_id("pro") is BuiltInPlan.PRO
    assert parse_plan_id("custom_1_abc") == CustomPlanId("custom_1_abc")


@pytest.mark.parametrize("raw", ["", "   ", None, "bad id", "x" * 65, "plan/1"])
def test_parse_plan_id_rejects_malformed_ids(raw):
    with pytest.raises(ValidationError):
        parse_plan_id(raw)


def test_list_plans_returns_built_ins_in_order(memory_catalog):
    plans = memory_catalog.list_plans()

    assert [p["id"] for p in plans] == ["free", "pro", "premium"]
    assert plans[2]["listingLimit"] == UNLIMITED
    assert memory_catalog.can_add_new_plan() is True


def test_get_plan_merges_override_over_built_in(memory_catalog):
    memory_catalog.update_plan("pro", {"price": 2499})

    plan = memory_catalog.get_plan("pro")
    assert plan["price"] == 2499
    assert plan["featuredCredits"] == PLAN_DETAILS["pro"]["featuredCredits"]
    assert memory_catalog.is_plan_modified("pro") is True
    assert memory_catalog.get_original_plan("pro")["price"] == PLAN_DETAILS["pro"]["price"]


def test_update_plan_only_validates_present_fields(memory_catalog):
    memory_catalog.update_plan("premium", {"features": ["Priority support"]})
    memory_catalog.update_plan("premium", {"isMostPopular": True})

    plan = memory_catalog.get_plan("premium")
    assert plan["features"] == ["Priority support"]
    assert plan["isMostPopular"] is True
    assert plan["name"] == "Premium"


def test_update_plan_rejects_invalid_values(memory_catalog):
    with pytest.raises(ValidationError):
        memory_catalog.update_plan("pro", {"price": -1})
    with pytest.raises(ValidationError):
        memory_catalog.update_plan("pro", {"listingLimit": 0})

    assert memory_catalog.is_plan_modified("pro") is False


def test_get_unknown_plan_raises_not_found(memory_catalog):
    with pytest.raises(NotFoundError):
        memory_catalog.get_plan("custom_does_not_exist")


def test_create_plan_validates_attributes(memory_catalog):
    with pytest.raises(ValidationError) as exc:
        memory_catalog.create_plan({"name": "  "})
    assert "name" in exc.value.messages

    with pytest.raises(ValidationError):
        memory_catalog.create_plan({"name": "Gold", "featuredCredits": -2})


def test_create_plan_stores_custom_plan_after_built_ins(memory_catalog):
    plan_id = memory_catalog.create_plan({"name": "Dealer", "price": 9999, "listingLimit": "unlimited"})

    assert plan_id.startswith("custom_")
    plans = memory_catalog.list_plans()
    assert [p["id"] for p in plans] == ["free", "pro", "premium", plan_id]
    assert plans[-1]["name"] == "Dealer"
    assert plans[-1]["listingLimit"] == UNLIMITED
    assert memory_catalog.can_add_new_plan() is False


def test_catalog_cap_blocks_fifth_plan(memory_catalog):
    memory_catalog.create_plan({"name": "Dealer"})
    assert memory_catalog.plan_count() == MAX_PLANS

    with pytest.raises(LimitExceededError):
        memory_catalog.create_plan({"name": "Another"})
    assert memory_catalog.plan_count() == MAX_PLANS


@pytest.mark.parametrize("plan_id", ["free", "pro", "premium"])
def test_built_in_plans_cannot_be_deleted(memory_catalog, plan_id):
    before = memory_catalog.list_plans()

    assert memory_catalog.delete_plan(plan_id) is False
    assert memory_catalog.list_plans() == before


def test_delete_custom_plan_frees_a_slot(memory_catalog):
    plan_id = memory_catalog.create_plan({"name": "Dealer"})

    assert memory_catalog.delete_plan(plan_id) is True
    assert memory_catalog.can_add_new_plan() is True
    with pytest.raises(NotFoundError):
        memory_catalog.get_plan(plan_id)


def test_free_stays_listed_after_refused_delete_and_full_catalog(memory_catalog):
    assert memory_catalog.delete_plan("free") is False
    assert "free" in [p["id"] for p in memory_catalog.list_plans()]

    memory_catalog.create_plan({"name": "Dealer"})
    with pytest.raises(LimitExceededError):
        memory_catalog.create_plan({"name": "Fleet"})


def test_overlong_plan_name_has_its_own_message(memory_catalog):
    with pytest.raises(ValidationError) as exc:
        memory_catalog.create_plan({"name": "x" * 101})

    assert exc.value.messages["name"] == ["Plan name must be at most 100 characters"]
