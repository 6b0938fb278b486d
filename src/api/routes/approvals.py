"""
Approval API Routes

Review queue and decisions for pending registrations.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.approvals import (
    ApprovalPage,
    GetApprovalHistoryUseCase,
    ListPendingApprovalsUseCase,
    ResolveApprovalResponse,
    ResolveApprovalUseCase,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.entities import ApprovalStatus

router = APIRouter(prefix="/approvals", tags=["Approvals"])


@router.get("/pending", status_code=status.HTTP_200_OK, response_model=ApprovalPage)
async def list_pending(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    tenant_id: Optional[UUID] = Query(None, description="Platform staff only: narrow to one company"),
):
    """
    Pending Approvals

    Requests the caller may decide, newest first.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: insufficient_role
    """
    result = await ListPendingApprovalsUseCase(uow).execute(
        current_user, page=page, limit=limit, tenant_id=tenant_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ApproveRequest(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)
    notes: Optional[str] = Field(None, max_length=1000)


async def _resolve(uow, request_id, actor, outcome, reason=None, notes=None):
    result = await ResolveApprovalUseCase(uow).execute(
        request_id, actor, outcome, reason=reason, notes=notes
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{request_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=ResolveApprovalResponse,
)
async def approve(
    request_id: UUID,
    request: Optional[ApproveRequest] = None,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve Registration

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot approve this request (reason in body)
        - 404 Not Found: Unknown request
        - 409 Conflict: ALREADY_RESOLVED
    """
    notes = request.notes if request else None
    return await _resolve(uow, request_id, current_user, ApprovalStatus.approved, notes=notes)


@router.post(
    "/{request_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ResolveApprovalResponse,
)
async def reject(
    request_id: UUID,
    request: RejectRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reject Registration

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot reject this request (reason in body)
        - 404 Not Found: Unknown request
        - 409 Conflict: ALREADY_RESOLVED
        - 422 Unprocessable Entity: Missing rejection reason
    """
    return await _resolve(
        uow,
        request_id,
        current_user,
        ApprovalStatus.rejected,
        reason=request.reason,
        notes=request.notes,
    )


@router.get("/history/{user_id}", status_code=status.HTTP_200_OK, response_model=ApprovalPage)
async def history(
    user_id: UUID,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """
    Approval History for one user

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot review this user's role
        - 404 Not Found: User unknown or outside the caller's company
    """
    result = await GetApprovalHistoryUseCase(uow).execute(
        user_id, current_user, page=page, limit=limit
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
