"""
Use Cases

Organized by domain folder:
- auth/: Login and token refresh
- registrations/: Company signup and member registration
- approvals/: Approval workflow
- users/: Principal management and current context
- admin/: Tenant lifecycle and platform staff
- audit/: Audit log
"""
