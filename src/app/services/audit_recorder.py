"""
Audit Recorder

Appends AuditEvent rows through the caller's unit of work, so an audit
trace commits or rolls back together with the change it describes.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent


class AuditRecorder:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        action: str,
        actor_id: Optional[UUID] = None,
        tenant_id: Optional[UUID] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[UUID] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        audit = AuditEvent(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            event_metadata=metadata or {},
        )
        return await self.uow.audit_events.create(audit)
