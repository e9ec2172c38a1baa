from .payment_request_resource import blp_payment_requests
from .plan_resource import blp_plans
from .entitlement_resource import blp_seller_entitlements
from .health_resource import blp_health
