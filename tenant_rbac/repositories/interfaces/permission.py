from abc import ABC, abstractmethod
from typing import List, Optional
from tenant_rbac.database import models

class IPermissionRepository(ABC):
    @abstractmethod
    def first_or_create(self, name: str, guard_name: str) -> models.Permission:
        """(name, guard_name)으로 권한을 조회하고, 없으면 생성합니다. 동시 생성 경합은 조회로 처리합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str, guard_name: str) -> Optional[models.Permission]:
        """이름과 가드로 특정 권한을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self, guard_name: Optional[str] = None) -> List[models.Permission]:
        """모든 권한 (또는 특정 가드의 권한) 목록을 조회합니다."""
        pass
