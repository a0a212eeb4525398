from config.env import env

# Only the REST API is exposed cross-origin (issuer front-end, public verification page)
CORS_URLS_REGEX = r"^/api/.*$"
CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = [
    origin.strip().lower()
    for origin in env.str("CORS_ALLOWED_ORIGINS", default="").split(",")
    if origin.strip()
]
