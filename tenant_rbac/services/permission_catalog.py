from enum import Enum
from typing import Iterable, List, Optional, Sequence, Type


class PermissionAction(str, Enum):
    """리소스에 적용할 수 있는 권한 동작의 닫힌 집합."""
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"

    def for_resource(self, resource: str) -> str:
        return permission_name(resource, self)


def permission_name(resource: str, action: PermissionAction) -> str:
    """
    권한의 정규 이름을 만듭니다. (예: 'users.edit')
    모든 컴포넌트가 이 이름을 조인 키로 사용하므로 형식이 바뀌어서는 안 됩니다.
    """
    return f"{resource}.{PermissionAction(action).value}"


class PermissionCatalog:
    """설정으로 주입된 리소스 목록과 동작 열거형으로부터 권한 이름을 생성합니다."""

    def __init__(self, resources: Iterable[str], actions: Type[PermissionAction] = PermissionAction):
        self.resources: List[str] = list(resources)
        self.actions: Sequence[PermissionAction] = list(actions)

    def names_for(self, resource: str) -> List[str]:
        """리소스 하나에 대해 선언된 동작 순서대로 권한 이름 목록을 반환합니다."""
        return [permission_name(resource, action) for action in self.actions]

    def all_names(self, resources: Optional[Iterable[str]] = None) -> List[str]:
        names = []
        for resource in (self.resources if resources is None else resources):
            names.extend(self.names_for(resource))
        return names
