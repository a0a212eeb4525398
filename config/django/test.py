from .base import *  # noqa

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production-use-0123456789"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"

METADATA_CACHE_URL = ""
REGISTRY_ADMIN_USERNAMES = []

# Adresses fictives: les tests remplacent les clients chain par des doubles
CHAIN_RPC_URL = "http://127.0.0.1:8545"
INSTITUTION_CONTRACT_ADDRESS = "0x" + "01" * 20
CERTIFICATION_CONTRACT_ADDRESS = "0x" + "02" * 20
CHAIN_SIGNER_PRIVATE_KEY = ""
