# resources/plan_resource.py

from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint
from marshmallow import ValidationError

from ..constants.plans import MAX_PLANS
from ..constants.service_code import ERROR_MESSAGES
from ..models.plan_id import is_built_in
from ..schemas.plan_schema import PlanIdSchema
from ..services.plan_service import get_plan_catalog
from ..utils.json_response import prepared_response
from ..utils.request import get_json_body
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_plans = Blueprint("plans", __name__, description="Subscription plan catalog")


@blp_plans.route("/plans", methods=["GET", "POST", "PUT", "DELETE"])
class Plans(MethodView):

    @blp_plans.response(200)
    def get(self):
        """List the plan catalog (at most 4 plans)."""
        catalog = get_plan_catalog()
        plans = catalog.list_plans()

        return prepared_response(
            status=True,
            status_code="OK",
            message="Plans retrieved successfully",
            plans=plans,
            canAddNewPlan=len(plans) < MAX_PLANS,
            maxPlans=MAX_PLANS,
        )

    @blp_plans.response(201)
    def post(self):
        """Create a custom plan."""
        body = get_json_body()
        log_tag = make_log_tag("plan_resource.py", "Plans", "post", request.remote_addr, None)

        if not body.get("name"):
            Log.info(f"{log_tag} plan name missing")
            raise ValidationError("Plan name is required", field_name="name")

        catalog = get_plan_catalog()
        plan_id = catalog.create_plan(body)

        Log.info(f"{log_tag} plan {plan_id} created")
        return prepared_response(
            status=True,
            status_code="CREATED",
            message="Plan created successfully",
            plan=catalog.get_plan(plan_id),
        )

    @blp_plans.response(200)
    def put(self):
        """Update a built-in or custom plan. Only the fields sent are changed."""
        body = get_json_body()
        plan_id = PlanIdSchema().load(body)["plan_id"]
        log_tag = make_log_tag("plan_resource.py", "Plans", "put", request.remote_addr, None, plan=plan_id)

        changes = {key: value for key, value in body.items() if key != "planId"}

        catalog = get_plan_catalog()
        catalog.update_plan(plan_id, changes)

        Log.info(f"{log_tag} plan updated")
        return prepared_response(
            status=True,
            status_code="OK",
            message="Plan updated successfully",
            plan=catalog.get_plan(plan_id),
        )

    @blp_plans.response(200)
    def delete(self):
        """Delete a custom plan. Built-in plans are refused."""
        plan_id = PlanIdSchema().load(request.args.to_dict())["plan_id"]
        log_tag = make_log_tag("plan_resource.py", "Plans", "delete", request.remote_addr, None, plan=plan_id)

        if not get_plan_catalog().delete_plan(plan_id):
            Log.info(f"{log_tag} refused to delete base plan")
            return prepared_response(
                status=False,
                status_code="BAD_REQUEST",
                message=ERROR_MESSAGES["BASE_PLAN_DELETE"],
                error="Conflict",
            )

        Log.info(f"{log_tag} plan deleted")
        return prepared_response(
            status=True,
            status_code="OK",
            message="Plan deleted successfully",
        )


@blp_plans.route("/plans/<string:plan_id>", methods=["GET"])
class PlanDetail(MethodView):

    @blp_plans.response(200)
    def get(self, plan_id):
        """Single plan with its edit state."""
        catalog = get_plan_catalog()
        plan = catalog.get_plan(plan_id)
        built_in = is_built_in(plan_id)

        return prepared_response(
            status=True,
            status_code="OK",
            message="Plan retrieved successfully",
            plan=plan,
            isBuiltIn=built_in,
            isModified=catalog.is_plan_modified(plan_id),
            originalPlan=catalog.get_original_plan(plan_id) if built_in else None,
        )
