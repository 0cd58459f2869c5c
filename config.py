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
    DB_URI = os.environ.get("DB_URI", data.get("DB_URI", "sqlite+aiosqlite:///./test.db"))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    APP_ENV = os.environ.get("APP_ENV", data.get("APP_ENV", "development"))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # disabled | soft | strict
    TENANCY_ENFORCEMENT = os.environ.get(
        "TENANCY_ENFORCEMENT", data.get("TENANCY_ENFORCEMENT", "strict")
    ).lower()
    TENANT_STATUS_CACHE_TTL_SECONDS = data.get("TENANT_STATUS_CACHE_TTL_SECONDS", 10)
    AGREEMENT_CACHE_TTL_SECONDS = data.get("AGREEMENT_CACHE_TTL_SECONDS", 60)
    ORPHAN_SAMPLE_LIMIT = data.get("ORPHAN_SAMPLE_LIMIT", 5)
    RUN_PARITY_CHECK_ON_STARTUP = bool(data.get("RUN_PARITY_CHECK_ON_STARTUP", True))
    RUN_TENANT_ID_CHECK_ON_STARTUP = bool(data.get("RUN_TENANT_ID_CHECK_ON_STARTUP", True))
