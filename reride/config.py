from dotenv import load_dotenv
load_dotenv()  # Load environment variables from .env file

import os

from .utils.errors import ConfigurationError


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "ReRide Marketplace API")

    DEBUG = os.getenv("FLASK_DEBUG", "False") == "True"
    TESTING = False

    # ========================================
    # DATABASE CONFIGURATION
    # ========================================
    MONGODB_URI = os.getenv("MONGODB_URI")
    DB_NAME = os.getenv("DB_NAME", "reride")
    # Upper bound (ms) for server selection, connect and socket reads on every store call
    MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "10000"))
    MONGO_MAX_POOL_SIZE = int(os.getenv("MONGO_MAX_POOL_SIZE", "10"))

    # "mongo" shares plan overrides across processes, "memory" is single-process only
    PLAN_STORE_BACKEND = os.getenv("PLAN_STORE_BACKEND", "mongo")

    # ========================================
    # RATE LIMITING
    # ========================================
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "True") == "True"
    # read by flask-limiter in init_app
    RATELIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
    PAYMENT_REQUEST_RATE_LIMIT = os.getenv("PAYMENT_REQUEST_RATE_LIMIT", "10 per minute")

    # ========================================
    # OPENAPI (flask-smorest)
    # ========================================
    API_TITLE = "ReRide Marketplace API"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"
    OPENAPI_SWAGGER_UI_PATH = "/docs"
    OPENAPI_SWAGGER_UI_URL = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/reride_dev")


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    MONGODB_URI = os.getenv("TEST_MONGODB_URI", "mongodb://localhost:27017/reride_test")
    DB_NAME = "reride_test"
    MONGO_TIMEOUT_MS = 2000
    PLAN_STORE_BACKEND = "memory"
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def load_config(app, config_object=None, overrides=None):
    """
    Apply the configuration class for APP_ENV (or `config_object`) to the app.

    Raises ConfigurationError when no MongoDB connection string is configured:
    the process cannot serve any request without it.
    """
    if config_object is None:
        app_env = os.getenv("APP_ENV", "production").strip().lower()
        config_object = CONFIG_BY_ENV.get(app_env, ProductionConfig)

    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    if not app.config.get("MONGODB_URI"):
        raise ConfigurationError(
            "MONGODB_URI is not set. Define it in the environment or .env file before starting the API."
        )

    backend = app.config.get("PLAN_STORE_BACKEND")
    if backend not in ("mongo", "memory"):
        raise ConfigurationError(f"PLAN_STORE_BACKEND must be 'mongo' or 'memory', got {backend!r}")
