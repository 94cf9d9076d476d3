import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "climbclub-dev-secret"

    # Single JSON document holding members, sessions and attendance
    DATA_FILE = os.environ.get("DATA_FILE", os.path.join("data", "climbclub.json"))

    # Admin login is checked server-side against this password (or a werkzeug hash)
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "")
    ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH", "")

    # Dev helpers
    AUTO_SEED_DATA = bool(int(os.environ.get("AUTO_SEED_DATA", "0")))
