"""
Registration Use Cases

Company signup, member self-registration and admin-created principals.
"""

from .submit_registration_use_case import SubmitRegistrationUseCase
from .dtos import CompanySignupCommand, MemberRegistrationCommand, RegistrationResponse

__all__ = [
    "SubmitRegistrationUseCase",
    "CompanySignupCommand",
    "MemberRegistrationCommand",
    "RegistrationResponse",
]
