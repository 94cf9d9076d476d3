import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_FILE = Config.DATA_FILE

ADMIN_PASSWORD = Config.ADMIN_PASSWORD
ADMIN_PASSWORD_HASH = Config.ADMIN_PASSWORD_HASH

DEBUG = False

AUTO_SEED_DATA = bool(int(os.getenv("AUTO_SEED_DATA", "0")))
