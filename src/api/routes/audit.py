"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditEventsResponse, GetAuditEventsUseCase
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_events(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    tenant_id: Optional[UUID] = Query(None, description="Platform staff only: narrow to one company"),
):
    """
    Get Audit Events

    Returns audit events for the caller's company (all companies for
    platform staff), newest first.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page
        - tenant_id: Company filter for platform staff

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: insufficient_role
    """
    result = await GetAuditEventsUseCase(uow).execute(
        current_user, limit=limit, cursor=cursor, tenant_id=tenant_id
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
