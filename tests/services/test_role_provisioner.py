# tests/services/test_role_provisioner.py
import pytest
from unittest.mock import MagicMock, call

from tenant_rbac import GLOBAL_TENANT_ID
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IPermissionRepository, IRoleRepository
from tenant_rbac.services.exceptions import InvalidTenantError, PersistenceFailure, RoleNotFoundError
from tenant_rbac.services.permission_cache import PermissionCache
from tenant_rbac.services.permission_catalog import PermissionCatalog
from tenant_rbac.services.role_provisioner import RoleProvisioner, RoleType, actions_only
from tenant_rbac.services.tenant_context import TenantContextResolver

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def permissions() -> dict:
    """이름 -> Permission 모델. 모의 리포지토리가 같은 이름에 같은 객체를 돌려주도록 합니다."""
    return {}

@pytest.fixture
def mock_permission_repo(permissions: dict) -> MagicMock:
    """IPermissionRepository에 대한 모의 객체를 생성합니다."""
    repo = MagicMock(spec=IPermissionRepository)

    def first_or_create(name, guard_name):
        if name not in permissions:
            permissions[name] = models.Permission(id=len(permissions) + 1, name=name, guard_name=guard_name)
        return permissions[name]

    repo.first_or_create.side_effect = first_or_create
    return repo

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    repo = MagicMock(spec=IRoleRepository)
    repo.first_or_create.side_effect = lambda name, guard_name, tenant_id: models.Role(
        id=1, name=name, guard_name=guard_name, tenant_id=tenant_id
    )
    repo.has_permission.return_value = False
    repo.list_permissions.return_value = []
    return repo

@pytest.fixture
def context() -> TenantContextResolver:
    return TenantContextResolver()

@pytest.fixture
def mock_cache() -> MagicMock:
    return MagicMock(spec=PermissionCache)

@pytest.fixture
def provisioner(mock_permission_repo, mock_role_repo, context, mock_cache) -> RoleProvisioner:
    """테스트에 사용될 RoleProvisioner 인스턴스를 생성하고, 의존성을 주입합니다."""
    return RoleProvisioner(mock_permission_repo, mock_role_repo, PermissionCatalog(["users", "media"]), context, mock_cache)

def granted_names(mock_role_repo: MagicMock) -> list:
    names = []
    for c in mock_role_repo.give_permissions.call_args_list:
        names.extend(p.name for p in c.args[1])
    return names

# ===================================================================
#  ensure_owner_role / ensure_user_role 테스트
# ===================================================================
class TestEnsureTenantRoles:
    def test_owner_role_gets_every_catalog_permission(self, provisioner, mock_role_repo, mock_cache):
        """Owner 역할은 필터 없이 카탈로그의 모든 권한을 받아야 합니다."""
        # === Act ===
        role = provisioner.ensure_owner_role(7, "web")

        # === Assert ===
        assert role.name == RoleType.OWNER.value
        assert role.tenant_id == 7
        mock_role_repo.first_or_create.assert_called_once_with("Owner", "web", 7)
        assert sorted(granted_names(mock_role_repo)) == sorted([
            "users.view", "users.create", "users.edit", "users.delete",
            "media.view", "media.create", "media.edit", "media.delete",
        ])
        mock_cache.invalidate.assert_called_once()

    def test_user_role_uses_policy(self, provisioner, mock_role_repo):
        """User 역할은 기본 정책(조회 전용)에 맞는 권한만 받아야 합니다."""
        provisioner.ensure_user_role(7, "web")

        assert sorted(granted_names(mock_role_repo)) == ["media.view", "users.view"]

    def test_user_role_policy_is_injectable(self, mock_permission_repo, mock_role_repo, context, mock_cache):
        provisioner = RoleProvisioner(
            mock_permission_repo, mock_role_repo, PermissionCatalog(["users"]), context, mock_cache,
            user_permission_policy=actions_only("view", "edit"),
        )

        provisioner.ensure_user_role(3, "web")

        assert sorted(granted_names(mock_role_repo)) == ["users.edit", "users.view"]

    def test_already_held_permissions_are_not_granted_again(self, provisioner, mock_role_repo):
        """이미 보유한 권한은 다시 부여하지 않습니다. (멱등성)"""
        mock_role_repo.has_permission.return_value = True

        provisioner.ensure_owner_role(7, "web")

        mock_role_repo.give_permissions.assert_not_called()

    @pytest.mark.parametrize("tenant_id", [0, -1, None])
    def test_tenant_roles_require_positive_tenant(self, provisioner, mock_role_repo, tenant_id):
        with pytest.raises(InvalidTenantError):
            provisioner.ensure_owner_role(tenant_id, "web")
        mock_role_repo.first_or_create.assert_not_called()

    def test_ensure_tenant_roles_returns_owner_and_user(self, provisioner):
        owner, user = provisioner.ensure_tenant_roles(4, "web")

        assert (owner.name, owner.tenant_id) == ("Owner", 4)
        assert (user.name, user.tenant_id) == ("User", 4)

# ===================================================================
#  스코프 관리 테스트
# ===================================================================
class TestScopeHandling:
    def test_writes_happen_inside_tenant_scope(self, provisioner, mock_role_repo, context):
        """쓰기 작업 동안은 스코프가 tenant_id로 설정되어 있어야 합니다."""
        seen = []
        mock_role_repo.give_permissions.side_effect = lambda role, perms: seen.append(context.current_scope())

        provisioner.ensure_owner_role(7, "web")

        assert seen == [7]
        assert context.current_scope() is None

    def test_scope_reset_after_persistence_failure(self, provisioner, mock_permission_repo, context, mock_cache):
        """저장소 오류로 중단되어도 스코프는 None으로 초기화되고, 캐시는 무효화되어야 합니다."""
        # === Arrange ===
        mock_permission_repo.first_or_create.side_effect = PersistenceFailure("db down")

        # === Act & Assert ===
        with pytest.raises(PersistenceFailure):
            provisioner.ensure_owner_role(7, "web")
        assert context.current_scope() is None
        mock_cache.invalidate.assert_called_once()

    def test_global_roles_are_created_in_global_scope(self, provisioner, mock_role_repo, context):
        roles = provisioner.ensure_global_roles("web")

        assert {r.name for r in roles} == {"Admin"}
        mock_role_repo.first_or_create.assert_called_once_with("Admin", "web", GLOBAL_TENANT_ID)
        assert len(granted_names(mock_role_repo)) == 8
        assert context.current_scope() is None

    def test_global_admin_is_synced_with_catalog(self, provisioner, mock_role_repo):
        """Admin은 카탈로그와 동기화되므로 카탈로그에 없는 권한은 회수됩니다."""
        # === Arrange ===
        stale = models.Permission(id=99, name="reports.view", guard_name="web")
        mock_role_repo.list_permissions.return_value = [stale]

        # === Act ===
        (admin,) = provisioner.ensure_global_roles("web")

        # === Assert ===
        mock_role_repo.revoke_permissions.assert_called_once_with(admin, [stale])

# ===================================================================
#  prune(회수) 정책 테스트
# ===================================================================
class TestPrune:
    def test_additive_by_default(self, provisioner, mock_role_repo):
        """기본 동작에서는 카탈로그 밖의 기존 권한을 회수하지 않습니다."""
        stale = models.Permission(id=99, name="reports.view", guard_name="web")
        mock_role_repo.first_or_create.side_effect = None
        mock_role_repo.list_permissions.return_value = [stale]
        mock_role_repo.first_or_create.return_value = models.Role(id=1, name="Owner", guard_name="web", tenant_id=7)

        provisioner.ensure_owner_role(7, "web")

        mock_role_repo.revoke_permissions.assert_not_called()

    def test_prune_revokes_permissions_outside_policy(self, provisioner, mock_role_repo):
        stale = models.Permission(id=99, name="reports.view", guard_name="web")
        role = models.Role(id=1, name="User", guard_name="web", tenant_id=7)
        mock_role_repo.list_permissions.return_value = [stale]
        mock_role_repo.first_or_create.side_effect = None
        mock_role_repo.first_or_create.return_value = role

        provisioner.ensure_role_with_permissions(
            "User", 7, "web", resources=["users"], permission_filter=actions_only("view"), prune=True
        )

        mock_role_repo.revoke_permissions.assert_called_once_with(role, [stale])

    def test_ensure_permissions_creates_catalog(self, provisioner, mock_permission_repo):
        created = provisioner.ensure_permissions("api")

        assert len(created) == 8
        assert call("users.view", "api") in mock_permission_repo.first_or_create.call_args_list

    def test_get_role_returns_provisioned_role(self, provisioner, mock_role_repo):
        owner = models.Role(id=1, name="Owner", guard_name="web", tenant_id=7)
        mock_role_repo.find.return_value = owner

        assert provisioner.get_role("Owner", 7, "web") is owner
        mock_role_repo.find.assert_called_once_with("Owner", "web", 7)

    def test_get_role_not_found(self, provisioner, mock_role_repo):
        mock_role_repo.find.return_value = None

        with pytest.raises(RoleNotFoundError):
            provisioner.get_role("Owner", 8, "web")
