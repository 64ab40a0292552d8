# tenant_rbac/config.py
import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    환경 변수(TENANT_RBAC_*)로 덮어쓸 수 있는 애플리케이션 설정입니다.
    리소스 목록은 코드에 고정하지 않고 설정으로 주입합니다.
    """
    model_config = SettingsConfigDict(env_prefix="TENANT_RBAC_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///tenant_rbac.db"
    default_guard: str = "web"
    resources: List[str] = ["media", "users"]

    admin_name: str = "Administrador"
    admin_email: str = "admin@example.com"
    admin_password: str = "change-me"
    demo_password: str = "change-me-too"
    demo_tenants: List[str] = ["Tenant A", "Tenant B"]

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """CLI 진입점에서 사용하는 기본 로깅 설정."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
