# resources/entitlement_resource.py

from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint

from ..schemas.payment_request_schema import SellerQuerySchema
from ..services.entitlement_service import get_entitlement_service
from ..utils.json_response import prepared_response
from ..utils.request import get_json_body
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_seller_entitlements = Blueprint(
    "seller_entitlements",
    __name__,
    description="Plan allowances and usage for a seller",
)


@blp_seller_entitlements.route("/sellers/entitlements", methods=["GET"])
class SellerEntitlements(MethodView):

    @blp_seller_entitlements.response(200)
    def get(self):
        """Listing, featured credit and certification allowances against usage."""
        query = SellerQuerySchema().load(request.args.to_dict())
        entitlements = get_entitlement_service().get_entitlements(query["seller_email"])

        return prepared_response(
            status=True,
            status_code="OK",
            message="Seller entitlements retrieved successfully",
            entitlements=entitlements,
        )


@blp_seller_entitlements.route("/sellers/featured-credits", methods=["POST"])
class SellerFeaturedCredits(MethodView):

    @blp_seller_entitlements.response(200)
    def post(self):
        """Spend one featured credit to feature a listing."""
        query = SellerQuerySchema().load(get_json_body())
        log_tag = make_log_tag(
            "entitlement_resource.py", "SellerFeaturedCredits", "post",
            request.remote_addr, query["seller_email"],
        )

        balance = get_entitlement_service().consume_featured_credit(query["seller_email"])

        Log.info(f"{log_tag} featured credit used")
        return prepared_response(
            status=True,
            status_code="OK",
            message="Featured credit used successfully",
            featuredCredits=balance,
        )


@blp_seller_entitlements.route("/sellers/certifications", methods=["POST"])
class SellerCertifications(MethodView):

    @blp_seller_entitlements.response(200)
    def post(self):
        query = SellerQuerySchema().load(get_json_body())
        log_tag = make_log_tag(
            "entitlement_resource.py", "SellerCertifications", "post",
            request.remote_addr, query["seller_email"],
        )

        used = get_entitlement_service().use_certification(query["seller_email"])

        Log.info(f"{log_tag} certification requested")
        return prepared_response(
            status=True,
            status_code="OK",
            message="Certification requested successfully",
            usedCertifications=used,
        )
