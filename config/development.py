import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGO_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB", "hr_assistant"),
}

# Links in notification e-mails are built from this
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:5000")

# No MAIL_SERVER: e-mails are written to the log instead of sent
MAIL_CONFIG = {
    "server": os.getenv("MAIL_SERVER", ""),
    "port": int(os.getenv("MAIL_PORT", "587")),
    "username": os.getenv("MAIL_USERNAME", ""),
    "password": os.getenv("MAIL_PASSWORD", ""),
    "use_tls": bool(int(os.getenv("MAIL_USE_TLS", "1"))),
    "sender": os.getenv("MAIL_SENDER", "HR Assistant <no-reply@localhost>"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# Create indexes on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: default list items and a demo admin login
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
