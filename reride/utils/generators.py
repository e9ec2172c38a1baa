import secrets
import string
import time


BASE36_ALPHABET = string.digits + string.ascii_lowercase


def _random_base36(length=9):
    return ''.join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def _prefixed_id(prefix):
    return f"{prefix}_{int(time.time() * 1000)}_{_random_base36()}"


def generate_payment_request_id():
    """Generate a payment request id, e.g. payment_1717171717171_k3j9x0q2a"""
    return _prefixed_id("payment")


def generate_custom_plan_id():
    """Generate a custom plan id, e.g. custom_1717171717171_0a9zz81mb"""
    return _prefixed_id("custom")
