import os

SECRET_KEY = os.environ["SECRET_KEY"]

DB_CONFIG = {
    "host": os.environ["DB_HOST"],
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.environ["DB_USER"],
    "password": os.environ["DB_PASSWORD"],
    "database": os.environ["DB_NAME"],
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SCAN_DEBOUNCE_MS = int(os.getenv("SCAN_DEBOUNCE_MS", "500"))
SCAN_SESSION_TTL_S = int(os.getenv("SCAN_SESSION_TTL_S", "1800"))
ENFORCE_DAILY_LIMIT = bool(int(os.getenv("ENFORCE_DAILY_LIMIT", "0")))
BEEP_SOUND = os.getenv("BEEP_SOUND", "beep.wav")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = False
