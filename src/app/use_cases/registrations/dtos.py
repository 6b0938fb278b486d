"""
Registration Use Case DTOs

Commands for the two ways a principal comes into being (company signup and
member registration) and the shared response.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Role


class CompanySignupCommand(BaseModel):
    """A company_super_admin registering a new company"""

    company_name: str
    company_domain: str
    industry: Optional[str] = None
    company_size: Optional[str] = None
    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None


class MemberRegistrationCommand(BaseModel):
    """
    A tenant principal joining an existing company.

    Without an actor the company is named by company_domain (self
    registration). With an actor the company is the actor's own, or
    tenant_id when the actor is platform staff.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: Role = Role.employee
    company_domain: Optional[str] = None
    tenant_id: Optional[UUID] = None


class RegistrationResponse(BaseModel):
    """Response for every registration path"""

    user_id: str
    tenant_id: str
    role: str
    approval_status: str
    approval_request_id: Optional[str] = None
    message: str
