
HTTP_STATUS_CODES = {
    "OK": 200,
    "CREATED": 201,
    "NO_CONTENT": 204,
    "BAD_REQUEST": 400,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "CONFLICT": 409,
    "TOO_MANY_REQUESTS": 429,
    "INTERNAL_SERVER_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

ERROR_MESSAGES = {
    "VALIDATION_FAILED": "Validation failed. Please check your inputs.",
    "ADMIN_REQUIRED": "Unauthorized - Admin access required",
    "SELLER_NOT_FOUND": "Seller not found",
    "PAYMENT_REQUEST_NOT_FOUND": "Payment request not found",
    "PAYMENT_REQUEST_NOT_PENDING": "Payment request is not pending",
    "PENDING_REQUEST_EXISTS": "You already have a pending payment request",
    "PLAN_NOT_FOUND": "Plan not found",
    "PLAN_LIMIT_REACHED": "Maximum of 4 plans allowed. Delete a custom plan before adding a new one.",
    "BASE_PLAN_DELETE": "Cannot delete base plans",
    "INVALID_ACTION": "Invalid action",
    "SERVER_ERROR": "An unexpected error occurred. Please try again later.",
}

USER_ROLES = {
    "CUSTOMER": "customer",
    "SELLER": "seller",
    "ADMIN": "admin",
}
