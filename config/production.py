import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

MONGO_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB", "hr_assistant"),
}

APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:5000")

MAIL_CONFIG = {
    "server": os.getenv("MAIL_SERVER", ""),
    "port": int(os.getenv("MAIL_PORT", "587")),
    "username": os.getenv("MAIL_USERNAME", ""),
    "password": os.getenv("MAIL_PASSWORD", ""),
    "use_tls": bool(int(os.getenv("MAIL_USE_TLS", "1"))),
    "sender": os.getenv("MAIL_SENDER", "HR Assistant <no-reply@localhost>"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
