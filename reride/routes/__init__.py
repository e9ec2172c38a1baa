from ..resources import (
    blp_payment_requests,
    blp_plans,
    blp_seller_entitlements,
    blp_health,
)


def register_routes(app, api):
    blueprints = [
        blp_payment_requests,
        blp_plans,
        blp_seller_entitlements,
        blp_health,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api")

    # Root route
    @app.route("/")
    def index():
        return {"message": "Welcome to the ReRide Marketplace API"}
