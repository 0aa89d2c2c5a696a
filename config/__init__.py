"""Settings modules, one per deployment environment."""

import os

SETTINGS_BY_ENV = {
    "development": "config.development",
    "dev": "config.development",
    "testing": "config.testing",
    "test": "config.testing",
    "production": "config.production",
    "prod": "config.production",
}


def get_settings_module() -> str:
    """Module path for ``APP_ENV``; unknown or unset values fall back to development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return SETTINGS_BY_ENV.get(env, "config.development")
