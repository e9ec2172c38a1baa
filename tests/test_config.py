import mongomock
import pytest

from reride import create_app
from reride.config import TestingConfig
from reride.utils.errors import ConfigurationError


def test_missing_mongodb_uri_fails_app_creation():
    with pytest.raises(ConfigurationError):
        create_app(TestingConfig, config_overrides={"MONGODB_URI": None}, mongo_client=mongomock.MongoClient())


def test_unknown_plan_store_backend_fails_app_creation():
    with pytest.raises(ConfigurationError):
        create_app(
            TestingConfig,
            config_overrides={"PLAN_STORE_BACKEND": "redis"},
            mongo_client=mongomock.MongoClient(),
        )


def test_testing_config_uses_memory_store(app):
    assert app.config["PLAN_STORE_BACKEND"] == "memory"
    assert app.config["TESTING"] is True
