import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./resource_hub.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 5000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get(
        "CORS_ORIGINS",
        [
            "http://127.0.0.1:8082",
            "http://localhost:8082",
            "http://127.0.0.1:5500",
            "http://localhost:5500",
        ],
    )
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # "production" marks the cross-origin deployment: session cookies get Secure + SameSite=None
    DEPLOYMENT_PROFILE = data.get("DEPLOYMENT_PROFILE", "local")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    RESET_PASSWORD_URL = data.get(
        "RESET_PASSWORD_URL", "http://localhost:8082/ResetPassword.html"
    )
    EMAIL_API_URL = data.get("EMAIL_API_URL", "https://api.resend.com/emails")
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "")

    UPLOAD_DIR = data.get("UPLOAD_DIR", os.path.join(ROOT_PATH, "uploads"))
    MAX_UPLOAD_BYTES = int(data.get("MAX_UPLOAD_BYTES", 50 * 1024 * 1024))

    RATE_LIMIT = data.get("RATE_LIMIT", "100/15minutes")
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
