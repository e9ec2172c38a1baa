from flask import request
from marshmallow import ValidationError


def get_json_body():
    """JSON body of the current request as a dict; {} when there is no body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
