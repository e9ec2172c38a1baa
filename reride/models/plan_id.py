# reride/models/plan_id.py

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from marshmallow import ValidationError


PLAN_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class BuiltInPlan(str, Enum):
    """The fixed, non-deletable plan tiers."""
    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"


@dataclass(frozen=True)
class CustomPlanId:
    """Any admin-created plan id outside the built-in set."""
    value: str

    def __str__(self):
        return self.value


PlanId = Union[BuiltInPlan, CustomPlanId]


def parse_plan_id(value) -> PlanId:
    """
    Classify a raw plan id.

    Raises marshmallow.ValidationError when the id is empty or contains
    characters other than letters, digits, '_' and '-'.
    """
    if isinstance(value, (BuiltInPlan, CustomPlanId)):
        return value

    raw = value.strip() if isinstance(value, str) else ""
    if not raw:
        raise ValidationError("Plan ID is required", field_name="planId")
    if not PLAN_ID_PATTERN.match(raw):
        raise ValidationError(f"Invalid plan ID '{raw[:64]}'", field_name="planId")

    try:
        return BuiltInPlan(raw)
    except ValueError:
        return CustomPlanId(raw)


def is_built_in(plan_id) -> bool:
    return isinstance(parse_plan_id(plan_id), BuiltInPlan)
