SECRET_KEY = "test-secret"

STORE_CONFIG = {
    "base_url": "http://store.test",
    "timeout": 5,
}

AUTH_CONFIG = {
    "authorize_url": "http://auth.test/login",
    "token_url": "http://auth.test/oauth2/token",
    "client_id": "test-client",
    "client_secret": None,
    "redirect_uri": "http://localhost/auth/callback",
}

REPORT_CONFIG = {
    "endpoint": "",
    "api_key": None,
    "timeout": 5,
}

BATCH_MAX_WORKERS = 4

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
