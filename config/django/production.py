from .base import *  # noqa

env.read_env(os.path.join(BASE_DIR, ".env.production"))

DEBUG = env_get("DEBUG", default=False)

SECRET_KEY = env_get("DJANGO_SECRET_KEY")

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=[]
)  # empty cos fe and be are on same domain

SESSION_COOKIE_SECURE = env_get("SESSION_COOKIE_SECURE", default=True)
CSRF_COOKIE_SECURE = env_get("CSRF_COOKIE_SECURE", default=True)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env_get("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SECURE_CONTENT_TYPE_NOSNIFF = env_get("SECURE_CONTENT_TYPE_NOSNIFF", default=True)

# Chain: le RPC et la clé du portefeuille viennent d'OpenBao en production
CHAIN_RPC_URL = env_get("CHAIN_RPC_URL", default=CHAIN_RPC_URL)
INSTITUTION_CONTRACT_ADDRESS = env_get("INSTITUTION_CONTRACT_ADDRESS", default=INSTITUTION_CONTRACT_ADDRESS)
CERTIFICATION_CONTRACT_ADDRESS = env_get("CERTIFICATION_CONTRACT_ADDRESS", default=CERTIFICATION_CONTRACT_ADDRESS)
CHAIN_SIGNER_PRIVATE_KEY = env_get("CHAIN_SIGNER_PRIVATE_KEY", default="")

METADATA_CACHE_URL = env_get("METADATA_CACHE_URL", default=METADATA_CACHE_URL)
