import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATA_FILE = Config.DATA_FILE

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "bulldok-admin")
ADMIN_PASSWORD_HASH = Config.ADMIN_PASSWORD_HASH

DEBUG = True

# If enabled and the data file is missing, it is created with sample sessions and members
AUTO_SEED_DATA = bool(int(os.getenv("AUTO_SEED_DATA", "1")))
