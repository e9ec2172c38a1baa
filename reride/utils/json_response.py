from flask import jsonify
from ..constants.service_code import HTTP_STATUS_CODES


def prepared_response(status, status_code, message, data=None, errors=None, error=None, **payload):
    """
    Build the JSON envelope shared by every endpoint.

    `message`, `status_code` and `success` are always present. Any extra
    keyword (e.g. paymentRequest=...) is placed at the top level next to them,
    even when its value is None, so clients can rely on the documented keys.
    """
    mandatory_fields = ["message", "status_code", "success"]

    all_fields = {
        "message": f"{message}",
        "status_code": HTTP_STATUS_CODES[status_code],
        "success": status,
        "error": error,
        "data": data,
        "errors": errors,
    }

    response_data = {
        key: value for key, value in all_fields.items()
        if key in mandatory_fields or value is not None
    }
    response_data.update(payload)

    return jsonify(response_data), HTTP_STATUS_CODES[status_code]
