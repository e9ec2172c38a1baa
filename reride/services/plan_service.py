# reride/services/plan_service.py

import copy
from typing import List

from flask import current_app

from ..constants.plans import PLAN_DETAILS, MAX_PLANS
from ..constants.service_code import ERROR_MESSAGES
from ..models.plan_id import BuiltInPlan, parse_plan_id, is_built_in
from ..models.plan_override_store import PlanOverrideStore
from ..schemas.plan_schema import load_plan
from ..utils.errors import NotFoundError, LimitExceededError
from ..utils.generators import generate_custom_plan_id
from ..utils.logger import Log


class PlanCatalog:
    """
    Subscription plans offered to sellers.

    RULES:
      - Built-in plans (free, pro, premium) always exist and can't be deleted
      - Admin edits are stored as overrides and merged over the built-in definition
      - Custom plans live only in the override store
      - The catalog never lists more than MAX_PLANS plans, built-ins first
    """

    def __init__(self, store: PlanOverrideStore):
        self.store = store

    # ---------------------------------------------------------
    # READS
    # ---------------------------------------------------------

    def get_plan(self, plan_id) -> dict:
        pid = parse_plan_id(plan_id)
        override = self.store.get(pid.value)

        if isinstance(pid, BuiltInPlan):
            plan = {**copy.deepcopy(PLAN_DETAILS[pid.value]), **(override or {})}
        elif override is not None:
            plan = dict(override)
        else:
            raise NotFoundError(ERROR_MESSAGES["PLAN_NOT_FOUND"], plan_id=pid.value)

        plan["id"] = pid.value
        return plan

    def list_plans(self) -> List[dict]:
        overrides = self.store.list()
        by_id = dict(overrides)

        plans = []
        for built_in in BuiltInPlan:
            plan = {**copy.deepcopy(PLAN_DETAILS[built_in.value]), **by_id.get(built_in.value, {})}
            plan["id"] = built_in.value
            plans.append(plan)

        for plan_id, attributes in overrides:
            if is_built_in(plan_id):
                continue
            plans.append({**attributes, "id": plan_id})

        return plans[:MAX_PLANS]

    def plan_count(self) -> int:
        return len(self.list_plans())

    def can_add_new_plan(self) -> bool:
        return self.plan_count() < MAX_PLANS

    def get_original_plan(self, plan_id) -> dict:
        """Built-in definition with no admin edits applied."""
        pid = parse_plan_id(plan_id)
        if not isinstance(pid, BuiltInPlan):
            raise NotFoundError(ERROR_MESSAGES["PLAN_NOT_FOUND"], plan_id=pid.value)
        return copy.deepcopy(PLAN_DETAILS[pid.value])

    def is_plan_modified(self, plan_id) -> bool:
        return self.store.get(parse_plan_id(plan_id).value) is not None

    # ---------------------------------------------------------
    # MUTATIONS
    # ---------------------------------------------------------

    def create_plan(self, data: dict) -> str:
        log_tag = "[plan_service.py][PlanCatalog][create_plan]"

        attributes = load_plan(data)

        if not self.can_add_new_plan():
            Log.info(f"{log_tag} plan limit of {MAX_PLANS} reached")
            raise LimitExceededError(ERROR_MESSAGES["PLAN_LIMIT_REACHED"], limit=MAX_PLANS)

        plan_id = generate_custom_plan_id()
        attributes["id"] = plan_id
        self.store.put(plan_id, attributes)

        Log.info(f"{log_tag}[{plan_id}] custom plan '{attributes.get('name')}' created")
        return plan_id

    def update_plan(self, plan_id, partial: dict) -> None:
        """
        Merge `partial` onto the stored override for `plan_id`, creating the
        override on the first edit. Only the fields present are validated.
        """
        pid = parse_plan_id(plan_id)
        attributes = load_plan(partial or {}, partial=True)

        existing = self.store.get(pid.value) or {}
        merged = {**existing, **attributes}
        if not isinstance(pid, BuiltInPlan):
            merged["id"] = pid.value
        self.store.put(pid.value, merged)

        Log.info(f"[plan_service.py][PlanCatalog][update_plan][{pid.value}] fields={sorted(attributes)}")

    def delete_plan(self, plan_id) -> bool:
        pid = parse_plan_id(plan_id)
        if isinstance(pid, BuiltInPlan):
            Log.info(f"[plan_service.py][PlanCatalog][delete_plan][{pid.value}] refused: built-in plan")
            return False

        removed = self.store.delete(pid.value)
        Log.info(f"[plan_service.py][PlanCatalog][delete_plan][{pid.value}] removed={removed}")
        return True


def get_plan_catalog() -> PlanCatalog:
    """Catalog bound to the running app (see create_app)."""
    return current_app.extensions["plan_catalog"]
