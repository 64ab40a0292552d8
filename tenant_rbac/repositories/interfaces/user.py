from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from tenant_rbac.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def save(self, user_model: models.User) -> models.User:
        """변경된 사용자 정보를 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]:
        """이메일로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.User]:
        """모든 사용자의 목록을 조회합니다."""
        pass

    @abstractmethod
    def attach_tenants(self, user: models.User, tenants: Iterable[models.Tenant]):
        """기존 멤버십을 유지한 채 사용자를 테넌트에 소속시킵니다."""
        pass
