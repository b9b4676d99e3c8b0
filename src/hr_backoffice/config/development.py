import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the bundled schema.sql is applied on startup (CREATE IF NOT EXISTS).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional first admin account for the login layer.
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@hr.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
