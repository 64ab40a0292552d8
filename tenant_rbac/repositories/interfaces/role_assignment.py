from abc import ABC, abstractmethod
from typing import List
from tenant_rbac.database import models

class IRoleAssignmentRepository(ABC):
    @abstractmethod
    def assign(self, user: models.User, role: models.Role, tenant_id: int):
        """사용자에게 tenant_id 스코프의 역할을 부여합니다. 이미 존재하면 무시합니다."""
        pass

    @abstractmethod
    def revoke(self, user: models.User, role: models.Role, tenant_id: int) -> bool:
        """사용자의 tenant_id 스코프 역할을 회수합니다. 회수한 경우 True를 반환합니다."""
        pass

    @abstractmethod
    def list_roles(self, user_id: int, tenant_id: int) -> List[models.Role]:
        """
        사용자가 특정 스코프에서 보유한 역할 목록을 조회합니다.

        Args:
            user_id: 조회할 사용자의 ID.
            tenant_id: 할당 레코드에 저장된 스코프 테넌트 ID (전역은 0).
        """
        pass

    @abstractmethod
    def list_assignments(self, user_id: int) -> List[models.UserRole]:
        """사용자의 모든 스코프에 걸친 역할 할당 레코드를 조회합니다."""
        pass
