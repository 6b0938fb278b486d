from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import AuditEvent
from src.domain.scoping import TenantScope


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Append an audit event (immutable)"""
        pass

    @abstractmethod
    async def get_scoped_paginated(
        self, scope: TenantScope, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events within a tenant scope with cursor-based pagination.

        Returns:
            Tuple of (events list, next_cursor)
            - events: List of audit events ordered by created_at DESC
            - next_cursor: Cursor for next page, None if no more events
        """
        pass
