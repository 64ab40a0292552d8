import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from tenant_rbac import GLOBAL_TENANT_ID

logger = logging.getLogger(__name__)


class TenantContextResolver:
    """
    역할/권한 조회 및 쓰기에 사용되는 "현재 스코프 테넌트"를 보관합니다.

    값은 ContextVar에 저장되므로 스레드나 asyncio 태스크마다 독립적입니다.
    None은 전역(테넌트 없음)을 의미합니다.
    스코프가 필요한 작업은 set_scope/clear_scope를 직접 호출하는 대신 scoped()를
    사용해야 합니다. scoped()는 예외가 발생하더라도 종료 시 스코프를 None으로 되돌립니다.
    """

    def __init__(self, name: str = "tenant_rbac_scope"):
        self._scope: ContextVar[Optional[int]] = ContextVar(name, default=None)

    def set_scope(self, tenant_id: Optional[int]):
        self._scope.set(tenant_id)

    def current_scope(self) -> Optional[int]:
        return self._scope.get()

    def clear_scope(self):
        self.set_scope(None)

    def effective_tenant_id(self) -> int:
        """현재 스코프를 저장용 테넌트 ID로 변환합니다. (None -> GLOBAL_TENANT_ID)"""
        scope = self.current_scope()
        return GLOBAL_TENANT_ID if scope is None else scope

    @contextmanager
    def scoped(self, tenant_id: Optional[int]) -> Iterator[int]:
        """
        블록 동안 스코프를 tenant_id로 설정하고, 블록을 벗어나면 반드시 None으로 초기화합니다.

        Yields:
            블록 안에서 유효한 저장용 테넌트 ID.
        """
        if self.current_scope() is not None:
            logger.warning("Entering tenant scope %s while scope %s is still set.", tenant_id, self.current_scope())
        self.set_scope(tenant_id)
        try:
            yield self.effective_tenant_id()
        finally:
            self.clear_scope()
