import os

# keep test runs off the filesystem log directory
os.environ.setdefault("LOG_TO_FILE", "false")

import mongomock
import pytest

from reride import create_app
from reride.config import TestingConfig
from reride.extensions.db import db


SELLER_EMAIL = "s@x.com"
ADMIN_EMAIL = "a@x.com"
CUSTOMER_EMAIL = "c@x.com"


def seed_users(database):
    database.users.insert_many([
        {
            "email": SELLER_EMAIL,
            "name": "Sam Seller",
            "role": "seller",
            "subscriptionPlan": "free",
            "featuredCredits": 0,
            "password": "hashed",
        },
        {"email": ADMIN_EMAIL, "name": "Ada Admin", "role": "admin"},
        {"email": CUSTOMER_EMAIL, "name": "Cal Customer", "role": "customer"},
    ])


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    app = create_app(TestingConfig, mongo_client=mongo_client)
    seed_users(mongo_client[app.config["DB_NAME"]])
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    return db.get_collection("users")


@pytest.fixture
def catalog(app):
    return app.extensions["plan_catalog"]


@pytest.fixture
def payment_service(app):
    return app.extensions["payment_request_service"]


@pytest.fixture
def entitlement_service(app):
    return app.extensions["entitlement_service"]
