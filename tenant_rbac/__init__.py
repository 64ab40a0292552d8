"""멀티 테넌트 역할/권한(RBAC) 라이브러리."""

GLOBAL_TENANT_ID = 0
