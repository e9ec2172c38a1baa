# schemas/plan_schema.py

from marshmallow import Schema, fields, validate, ValidationError, EXCLUDE, pre_load

from ..constants.plans import UNLIMITED


class ListingLimitField(fields.Field):
    """A listing cap: a positive integer or the "unlimited" sentinel."""

    default_error_messages = {
        "invalid": "Listing limit must be a whole number or 'unlimited'.",
        "too_small": "Listing limit must be at least 1",
    }

    def _serialize(self, value, attr, obj, **kwargs):
        return value

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str) and value.strip().lower() == UNLIMITED:
            return UNLIMITED
        if isinstance(value, bool):
            raise self.make_error("invalid")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise self.make_error("invalid")
        if isinstance(value, float) and number != value:
            raise self.make_error("invalid")
        if number < 1:
            raise self.make_error("too_small")
        return number


class PlanSchema(Schema):
    """
    Plan attributes as sent by the admin console.

    Loading yields snake_case keys, dumping yields the camelCase document
    stored in the override store and returned to clients.
    """
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)

    name = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, error="Plan name is required"),
            validate.Length(max=100, error="Plan name must be at most {max} characters"),
        ],
        error_messages={"required": "Plan name is required", "null": "Plan name is required"},
    )

    price = fields.Integer(
        load_default=0,
        validate=validate.Range(min=0, error="Price cannot be negative"),
    )

    listing_limit = ListingLimitField(data_key="listingLimit", load_default=1)

    featured_credits = fields.Integer(
        data_key="featuredCredits",
        load_default=0,
        validate=validate.Range(min=0, error="Featured credits cannot be negative"),
    )

    free_certifications = fields.Integer(
        data_key="freeCertifications",
        load_default=0,
        validate=validate.Range(min=0, error="Free certifications cannot be negative"),
    )

    features = fields.List(
        fields.Str(validate=validate.Length(min=1)),
        load_default=list,
    )

    is_most_popular = fields.Bool(data_key="isMostPopular", load_default=False)

    @pre_load
    def strip_name(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            data = dict(data)
            data["name"] = data["name"].strip()
        return data


class PlanIdSchema(Schema):
    """`planId` from a query string or a JSON body, everything else ignored."""
    class Meta:
        unknown = EXCLUDE

    plan_id = fields.Str(
        data_key="planId",
        required=True,
        validate=validate.Length(min=1, error="Plan ID is required"),
        error_messages={"required": "Plan ID is required"},
    )


def load_plan(payload, partial=False):
    """Validate plan attributes and return them in their stored (camelCase) form."""
    if not isinstance(payload, dict):
        raise ValidationError("Plan data must be a JSON object")
    schema = PlanSchema()
    return schema.dump(schema.load(payload, partial=partial))
