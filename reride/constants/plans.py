# constants/plans.py

"""
Built-in subscription plans offered to sellers.

Admins may override any attribute of these plans and add custom plans, but
the catalog never exposes more than MAX_PLANS entries and built-in plans can
never be deleted.
"""

UNLIMITED = "unlimited"

MAX_PLANS = 4

DEFAULT_PLAN_ID = "free"

PLAN_DETAILS = {
    "free": {
        "id": "free",
        "name": "Free",
        "price": 0,
        "listingLimit": 1,
        "featuredCredits": 0,
        "freeCertifications": 0,
        "features": [
            "1 Active Listing",
            "Basic Seller Profile",
            "Standard Support",
        ],
    },
    "pro": {
        "id": "pro",
        "name": "Pro",
        "price": 1999,
        "listingLimit": 10,
        "featuredCredits": 2,
        "freeCertifications": 1,
        "isMostPopular": True,
        "features": [
            "10 Active Listings",
            "2 Featured Credits/month",
            "1 Free Certified Inspection/month",
            "Enhanced Seller Profile",
            "Performance Analytics",
            "Priority Support",
        ],
    },
    "premium": {
        "id": "premium",
        "name": "Premium",
        "price": 4999,
        "listingLimit": UNLIMITED,
        "featuredCredits": 5,
        "freeCertifications": 3,
        "features": [
            "Unlimited Active Listings",
            "5 Featured Credits/month",
            "3 Free Certified Inspections/month",
            "AI Listing Assistant",
            "Advanced Analytics",
            "Dedicated Support",
        ],
    },
}
