# constants/payment_methods.py

"""
Payment methods a seller can declare when submitting proof of payment
for a plan upgrade.
"""

PAYMENT_METHODS = {
    "UPI": "upi",
    "BANK_TRANSFER": "bank_transfer",
    "CARD": "card",
    "OTHER": "other",
}


def get_all_payment_methods():
    """Return all accepted payment method values."""
    return list(PAYMENT_METHODS.values())
