from abc import ABC, abstractmethod
from typing import List, Optional
from tenant_rbac.database import models

class ITenantRepository(ABC):
    @abstractmethod
    def create(self, tenant_model: models.Tenant) -> models.Tenant:
        """새로운 테넌트를 데이터베이스에 생성합니다. 이름이 이미 존재하면 기존 테넌트를 반환합니다."""
        pass

    @abstractmethod
    def save(self, tenant_model: models.Tenant) -> models.Tenant:
        """변경된 테넌트 정보를 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, tenant_id: int) -> Optional[models.Tenant]:
        """고유 ID로 특정 테넌트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Tenant]:
        """이름으로 특정 테넌트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_uuid(self, uuid: str) -> Optional[models.Tenant]:
        """외부 노출용 UUID로 특정 테넌트를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Tenant]:
        """모든 테넌트의 목록을 조회합니다."""
        pass
