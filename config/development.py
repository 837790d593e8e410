import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "writer_desk"),
}

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
WRITER_SESSION_DAYS = int(os.getenv("WRITER_SESSION_DAYS", "30"))

# Also re-sync the old writer when an assignment is reassigned.
RECONCILE_PREVIOUS_WRITER = bool(int(os.getenv("RECONCILE_PREVIOUS_WRITER", "0")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
