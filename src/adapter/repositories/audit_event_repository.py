import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.scoping import apply_tenant_scope
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent
from src.domain.scoping import TenantScope


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Append an audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_scoped_paginated(
        self, scope: TenantScope, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events within a tenant scope with cursor-based pagination.

        Cursor format: base64-encoded "<ISO created_at>|<id>" of the last row
        returned. Rows sharing a timestamp are ordered by id, so none are
        skipped between pages.
        """
        stmt = apply_tenant_scope(select(AuditEvent), AuditEvent.tenant_id, scope)

        position = self._decode_cursor(cursor) if cursor else None
        if position:
            cursor_timestamp, cursor_id = position
            stmt = stmt.where(
                or_(
                    AuditEvent.created_at < cursor_timestamp,
                    and_(AuditEvent.created_at == cursor_timestamp, AuditEvent.id < cursor_id),
                )
            )

        # Newest first, one extra row to detect a next page
        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            last = events[-1]
            raw = f"{last.created_at.isoformat()}|{last.id}"
            next_cursor = base64.b64encode(raw.encode("utf-8")).decode("utf-8")

        return events, next_cursor

    @staticmethod
    def _decode_cursor(cursor: str) -> Optional[Tuple[datetime, UUID]]:
        try:
            raw = base64.b64decode(cursor).decode("utf-8")
            timestamp_str, id_str = raw.split("|", 1)
            return datetime.fromisoformat(timestamp_str), UUID(id_str)
        except (ValueError, TypeError):
            # Invalid cursor, ignore and return from beginning
            return None
