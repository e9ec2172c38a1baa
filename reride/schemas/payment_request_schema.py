# schemas/payment_request_schema.py

from marshmallow import Schema, fields, validate, EXCLUDE

from ..constants.payment_methods import get_all_payment_methods


PAYMENT_REQUEST_STATUSES = ["pending", "approved", "rejected"]


class CreatePaymentRequestSchema(Schema):
    """Seller submits a plan upgrade with optional proof of payment."""
    class Meta:
        unknown = EXCLUDE

    seller_email = fields.Email(
        data_key="sellerEmail",
        required=True,
        error_messages={"required": "sellerEmail, planId, and amount required"},
    )

    plan_id = fields.Str(
        data_key="planId",
        required=True,
        validate=validate.Length(min=1, error="sellerEmail, planId, and amount required"),
        error_messages={"required": "sellerEmail, planId, and amount required"},
    )

    amount = fields.Integer(
        required=True,
        validate=validate.Range(min=1, error="Amount must be greater than zero"),
        error_messages={"required": "sellerEmail, planId, and amount required"},
    )

    payment_proof = fields.Str(data_key="paymentProof", required=False, allow_none=True)

    payment_method = fields.Str(
        data_key="paymentMethod",
        required=False,
        allow_none=True,
        validate=validate.OneOf(get_all_payment_methods(), error="Payment method must be one of: {choices}"),
    )

    transaction_id = fields.Str(data_key="transactionId", required=False, allow_none=True)


class ApprovePaymentRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    payment_request_id = fields.Str(
        data_key="paymentRequestId",
        required=True,
        validate=validate.Length(min=1, error="paymentRequestId and adminEmail required"),
        error_messages={"required": "paymentRequestId and adminEmail required"},
    )

    admin_email = fields.Str(
        data_key="adminEmail",
        required=True,
        validate=validate.Length(min=1, error="paymentRequestId and adminEmail required"),
        error_messages={"required": "paymentRequestId and adminEmail required"},
    )

    notes = fields.Str(required=False, allow_none=True, validate=validate.Length(max=1000))


class RejectPaymentRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    payment_request_id = fields.Str(
        data_key="paymentRequestId",
        required=True,
        validate=validate.Length(min=1, error="paymentRequestId and adminEmail required"),
        error_messages={"required": "paymentRequestId and adminEmail required"},
    )

    admin_email = fields.Str(
        data_key="adminEmail",
        required=True,
        validate=validate.Length(min=1, error="paymentRequestId and adminEmail required"),
        error_messages={"required": "paymentRequestId and adminEmail required"},
    )

    rejection_reason = fields.Str(
        data_key="rejectionReason",
        required=False,
        allow_none=True,
        validate=validate.Length(max=1000),
    )


class PaymentRequestListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    admin_email = fields.Str(
        data_key="adminEmail",
        required=True,
        validate=validate.Length(min=1, error="Admin email required"),
        error_messages={"required": "Admin email required"},
    )

    status = fields.Str(
        load_default="pending",
        validate=validate.OneOf(PAYMENT_REQUEST_STATUSES, error="Status must be one of: {choices}"),
    )


class SellerQuerySchema(Schema):
    """`sellerEmail` from the query string (status/history/entitlements) or a JSON body."""
    class Meta:
        unknown = EXCLUDE

    seller_email = fields.Str(
        data_key="sellerEmail",
        required=True,
        validate=validate.Length(min=1, error="sellerEmail required"),
        error_messages={"required": "sellerEmail required"},
    )
