import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Quiet window for identical decode events coming from the camera
SCAN_DEBOUNCE_MS = int(os.getenv("SCAN_DEBOUNCE_MS", "500"))
SCAN_SESSION_TTL_S = int(os.getenv("SCAN_SESSION_TTL_S", "1800"))
# One time_in / time_out per student per day
ENFORCE_DAILY_LIMIT = bool(int(os.getenv("ENFORCE_DAILY_LIMIT", "0")))
BEEP_SOUND = os.getenv("BEEP_SOUND", "beep.wav")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
