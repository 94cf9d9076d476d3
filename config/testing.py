import os

SECRET_KEY = "test-secret"

DATA_FILE = os.getenv("DATA_FILE", os.path.join("data", "climbclub-test.json"))

ADMIN_PASSWORD = "test-admin"
ADMIN_PASSWORD_HASH = ""

DEBUG = False
TESTING = True

AUTO_SEED_DATA = False
