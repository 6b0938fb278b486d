"""
Audit Use Cases

All audit-related business logic.
"""

from .get_audit_events_use_case import AuditEventInfo, AuditEventsResponse, GetAuditEventsUseCase

__all__ = [
    "GetAuditEventsUseCase",
    "AuditEventInfo",
    "AuditEventsResponse",
]
