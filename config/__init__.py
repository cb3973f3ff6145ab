import os

SETTINGS_BY_ENV = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    """Dotted name of the settings module for APP_ENV.

    SCANNER_SETTINGS, when set, names a settings module directly and wins over
    APP_ENV. Unknown environments fall back to development.
    """
    explicit = os.getenv("SCANNER_SETTINGS", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return SETTINGS_BY_ENV.get(env, "config.development")
