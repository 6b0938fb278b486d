"""
Get Audit Events Use Case

Retrieves audit events within the actor's tenant scope with pagination.
"""

from datetime import UTC, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import MAX_PAGE_SIZE
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.errors import FORBIDDEN, VALIDATION_FAILED
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return


class AuditEventInfo(BaseModel):
    """Single audit event in response"""

    id: str
    action: str
    tenant_id: Optional[str]
    actor_id: Optional[str]
    actor_email: Optional[str]
    resource_type: Optional[str]
    resource_id: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventInfo]
    next_cursor: Optional[str]


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - Caller needs view_audit_log
    - Tenant actors only see their tenant's events; platform actors see
      everything and may narrow to one tenant
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes action, actor_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: TokenClaims,
        limit: int = 50,
        cursor: Optional[str] = None,
        tenant_id: Optional[UUID] = None,
    ) -> Result[AuditEventsResponse]:
        """
        Execute get audit events use case.

        Args:
            actor: Verified claims of the caller
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)
            tenant_id: Tenant filter for platform actors (ignored for tenant actors)

        Returns:
            Result with events list and next_cursor, or Error
        """
        if limit < 1 or limit > MAX_PAGE_SIZE:
            return Return.err(
                Error(VALIDATION_FAILED, f"limit must be between 1 and {MAX_PAGE_SIZE}")
            )

        decision = authorize_claims(actor, Capabilities.VIEW_AUDIT_LOG, actor.tenant_id)
        if not decision:
            return Return.err(
                Error(
                    FORBIDDEN,
                    "You do not have permission to view audit events",
                    reason=decision.reason.value,
                )
            )

        scope = TenantScope.for_claims(actor).narrow(tenant_id)

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_scoped_paginated(
                scope, limit=limit, cursor=cursor
            )

            # Resolve actor emails once per actor
            emails: Dict[UUID, Optional[str]] = {}
            for event in events:
                if event.actor_id and event.actor_id not in emails:
                    emails[event.actor_id] = await self._actor_email(event.actor_id)

            events_list = [
                AuditEventInfo(
                    id=str(event.id),
                    action=event.action,
                    tenant_id=str(event.tenant_id) if event.tenant_id else None,
                    actor_id=str(event.actor_id) if event.actor_id else None,
                    actor_email=emails.get(event.actor_id) if event.actor_id else None,
                    resource_type=event.resource_type,
                    resource_id=str(event.resource_id) if event.resource_id else None,
                    timestamp=_utc_iso(event.created_at),
                    metadata=event.event_metadata or {},
                )
                for event in events
            ]

        return Return.ok(AuditEventsResponse(events=events_list, next_cursor=next_cursor))

    async def _actor_email(self, actor_id: UUID) -> Optional[str]:
        user = await self.uow.users.get_by_id(actor_id)
        if user:
            return user.email
        admin = await self.uow.platform_admins.get_by_id(actor_id)
        return admin.email if admin else None


def _utc_iso(value: datetime) -> str:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat().replace("+00:00", "Z")
