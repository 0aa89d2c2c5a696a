import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

STORE_CONFIG = {
    "base_url": os.getenv("STORE_BASE_URL", "http://localhost:3001"),
    "timeout": float(os.getenv("STORE_TIMEOUT", "15")),
}

AUTH_CONFIG = {
    "authorize_url": os.getenv("AUTH_AUTHORIZE_URL", "http://localhost:9000/login"),
    "token_url": os.getenv("AUTH_TOKEN_URL", "http://localhost:9000/oauth2/token"),
    "client_id": os.getenv("AUTH_CLIENT_ID", "attendance-dashboard-dev"),
    "client_secret": os.getenv("AUTH_CLIENT_SECRET") or None,
    "redirect_uri": os.getenv("AUTH_REDIRECT_URI", "http://localhost:5000/auth/callback"),
}

# Empty endpoint -> static "disabled" report text
REPORT_CONFIG = {
    "endpoint": os.getenv("REPORT_ENDPOINT", ""),
    "api_key": os.getenv("REPORT_API_KEY") or None,
    "timeout": float(os.getenv("REPORT_TIMEOUT", "30")),
}

BATCH_MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "8"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
