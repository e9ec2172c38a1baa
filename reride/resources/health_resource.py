# resources/health_resource.py

from flask.views import MethodView
from flask_smorest import Blueprint

from ..extensions.db import db
from ..utils.json_response import prepared_response

blp_health = Blueprint("health", __name__, description="Liveness and store reachability")


@blp_health.route("/health", methods=["GET"])
class Health(MethodView):

    @blp_health.response(200)
    def get(self):
        # raises UnavailableError (503) when the store can't be reached
        db.ping()
        return prepared_response(
            status=True,
            status_code="OK",
            message="Service is healthy",
        )
