from src.domain.scoping import TenantScope


def apply_tenant_scope(stmt, column, scope: TenantScope):
    """
    Add the tenant filter for scope to a select statement.

    Every scoped query in the adapters goes through here; an unrestricted
    (platform) scope leaves the statement untouched.
    """
    if scope.unrestricted:
        return stmt
    return stmt.where(column == scope.tenant_id)
