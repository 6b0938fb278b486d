"""
Approval Use Cases

Listing, resolving and auditing approval requests.
"""

from .list_pending_approvals_use_case import ListPendingApprovalsUseCase
from .resolve_approval_use_case import ResolveApprovalUseCase
from .get_approval_history_use_case import GetApprovalHistoryUseCase
from .dtos import ApprovalPage, ApprovalRequestInfo, ResolveApprovalResponse, SubjectSummary

__all__ = [
    "ListPendingApprovalsUseCase",
    "ResolveApprovalUseCase",
    "GetApprovalHistoryUseCase",
    "ApprovalPage",
    "ApprovalRequestInfo",
    "ResolveApprovalResponse",
    "SubjectSummary",
]
