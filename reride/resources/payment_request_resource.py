# resources/payment_request_resource.py

from flask import current_app, request
from flask.views import MethodView
from flask_smorest import Blueprint

from ..constants.service_code import ERROR_MESSAGES
from ..schemas.payment_request_schema import (
    CreatePaymentRequestSchema,
    ApprovePaymentRequestSchema,
    RejectPaymentRequestSchema,
    PaymentRequestListQuerySchema,
    SellerQuerySchema,
)
from ..services.payment_request_service import get_payment_request_service
from ..utils.extensions import limiter, seller_key_func
from ..utils.json_response import prepared_response
from ..utils.request import get_json_body
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_payment_requests = Blueprint(
    "payment_requests",
    __name__,
    description="Seller plan upgrade requests and admin approval",
)


def _invalid_action(log_tag, action):
    Log.info(f"{log_tag} invalid action {action!r}")
    return prepared_response(
        status=False,
        status_code="BAD_REQUEST",
        message=ERROR_MESSAGES["INVALID_ACTION"],
        error="ValidationError",
    )


def _payment_request_rate_limit():
    return current_app.config.get("PAYMENT_REQUEST_RATE_LIMIT", "10 per minute")


@blp_payment_requests.route("/payment-requests", methods=["GET", "POST", "PUT"])
class PaymentRequests(MethodView):
    """
    Single endpoint driven by ?action=:
      GET  status | history | list
      POST create
      PUT  approve | reject
    """

    decorators = [
        limiter.limit(
            _payment_request_rate_limit,
            methods=["POST"],
            key_func=seller_key_func,
            error_message="Too many payment requests, please try again later.",
        )
    ]

    @blp_payment_requests.response(200)
    def get(self):
        action = request.args.get("action")
        log_tag = make_log_tag(
            "payment_request_resource.py", "PaymentRequests", "get",
            request.remote_addr, request.args.get("adminEmail") or request.args.get("sellerEmail"),
            action=action,
        )
        service = get_payment_request_service()

        if action == "status":
            query = SellerQuerySchema().load(request.args.to_dict())
            payment_request = service.get_status(query["seller_email"])

            Log.info(f"{log_tag} status={payment_request.get('status') if payment_request else None}")
            return prepared_response(
                status=True,
                status_code="OK",
                message="Payment request status retrieved successfully",
                paymentRequest=payment_request,
            )

        if action == "history":
            query = SellerQuerySchema().load(request.args.to_dict())
            history = service.get_history(query["seller_email"])

            return prepared_response(
                status=True,
                status_code="OK",
                message="Payment request history retrieved successfully",
                paymentRequests=history,
            )

        if action == "list":
            query = PaymentRequestListQuerySchema().load(request.args.to_dict())
            payment_requests = service.list_requests(query["admin_email"], query["status"])

            return prepared_response(
                status=True,
                status_code="OK",
                message="Payment requests retrieved successfully",
                paymentRequests=payment_requests,
            )

        return _invalid_action(log_tag, action)

    @blp_payment_requests.response(201)
    def post(self):
        action = request.args.get("action")
        body = get_json_body()
        log_tag = make_log_tag(
            "payment_request_resource.py", "PaymentRequests", "post",
            request.remote_addr, body.get("sellerEmail"), action=action,
        )

        if action != "create":
            return _invalid_action(log_tag, action)

        json_data = CreatePaymentRequestSchema().load(body)
        payment_request = get_payment_request_service().submit_request(**json_data)

        Log.info(f"{log_tag} payment request {payment_request['id']} created")
        return prepared_response(
            status=True,
            status_code="CREATED",
            message="Payment request created successfully",
            paymentRequest=payment_request,
        )

    @blp_payment_requests.response(200)
    def put(self):
        action = request.args.get("action")
        body = get_json_body()
        log_tag = make_log_tag(
            "payment_request_resource.py", "PaymentRequests", "put",
            request.remote_addr, body.get("adminEmail"),
            action=action, payment_request=body.get("paymentRequestId"),
        )
        service = get_payment_request_service()

        if action == "approve":
            json_data = ApprovePaymentRequestSchema().load(body)
            payment_request = service.approve(
                json_data["payment_request_id"],
                json_data["admin_email"],
                notes=json_data.get("notes"),
            )

            Log.info(f"{log_tag} approved")
            return prepared_response(
                status=True,
                status_code="OK",
                message="Payment request approved successfully",
                paymentRequest=payment_request,
            )

        if action == "reject":
            json_data = RejectPaymentRequestSchema().load(body)
            payment_request = service.reject(
                json_data["payment_request_id"],
                json_data["admin_email"],
                rejection_reason=json_data.get("rejection_reason"),
            )

            Log.info(f"{log_tag} rejected")
            return prepared_response(
                status=True,
                status_code="OK",
                message="Payment request rejected",
                paymentRequest=payment_request,
            )

        return _invalid_action(log_tag, action)
