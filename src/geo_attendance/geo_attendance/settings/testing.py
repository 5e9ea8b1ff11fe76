from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = True
