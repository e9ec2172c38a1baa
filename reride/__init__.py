from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from marshmallow import ValidationError
from flask_smorest import Api
from flask_limiter.errors import RateLimitExceeded
from pymongo.errors import PyMongoError

from .utils.extensions import limiter
from .extensions import db, cors
from .config import load_config
from .routes import register_routes
from .models.plan_override_store import build_plan_override_store
from .services.plan_service import PlanCatalog
from .services.payment_request_service import PaymentRequestService
from .services.entitlement_service import EntitlementService
from .utils.errors import ServiceError
from .utils.error_handlers import (
    handle_validation_error, handle_service_error, handle_rate_limit,
)
from .utils.logger import Log


def create_app(config_object=None, config_overrides=None, mongo_client=None, plan_store=None):
    """
    Build the marketplace API.

    `mongo_client` and `plan_store` replace the configured MongoDB client and
    plan override store (tests pass a mongomock client and an in-memory store).
    """
    app = Flask(__name__)

    # get actual client IP
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=1,      # Trust X-Forwarded-For
        x_proto=1,    # Trust X-Forwarded-Proto
        x_host=1,     # Trust X-Forwarded-Host
        x_port=1,     # Trust X-Forwarded-Port
        x_prefix=1    # Trust X-Forwarded-Prefix
    )

    # Raises ConfigurationError before anything connects
    load_config(app, config_object, config_overrides)

    api = Api(app)

    # Initialize all extensions
    db.init_app(app, client=mongo_client)
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}}, send_wildcard=True)
    limiter.init_app(app)

    # Setup database indexes (no-op when they already exist)
    with app.app_context():
        try:
            db.create_indexes()
        except PyMongoError as e:
            Log.error(f"[__init__.py][create_app] could not create indexes: {e}")

    # Services shared by every request
    store = plan_store or build_plan_override_store(app.config["PLAN_STORE_BACKEND"])
    catalog = PlanCatalog(store)
    app.extensions["plan_catalog"] = catalog
    app.extensions["payment_request_service"] = PaymentRequestService(catalog)
    app.extensions["entitlement_service"] = EntitlementService(catalog)

    # Register custom error handlers
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(ServiceError)(handle_service_error)
    app.errorhandler(RateLimitExceeded)(handle_rate_limit)

    register_routes(app, api)

    Log.info(f"[__init__.py][create_app] app ready (plan store: {type(store).__name__})")
    return app
