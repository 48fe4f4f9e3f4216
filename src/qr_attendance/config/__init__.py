import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "qr_attendance.config.production"

    if env in {"test", "testing"}:
        return "qr_attendance.config.testing"

    return "qr_attendance.config.development"
