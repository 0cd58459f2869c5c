from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt


class StrictConfig(ApplicationConfig):
    TENANCY_ENFORCEMENT = "strict"
    RUN_PARITY_CHECK_ON_STARTUP = False
    RUN_TENANT_ID_CHECK_ON_STARTUP = False
    APP_ENV = "test"


class SoftConfig(StrictConfig):
    TENANCY_ENFORCEMENT = "soft"


class DisabledConfig(StrictConfig):
    TENANCY_ENFORCEMENT = "disabled"


def auth_headers(user_id, tenant_id, role):
    return {"Authorization": f"Bearer {generate_jwt(user_id, tenant_id, role)}"}
