"""
Input checks shared by the registration paths.

All of them run before the store is touched.
"""

import re
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from src.app.services.credential_verifier import CredentialVerifier

EMAIL_ADAPTER = TypeAdapter(EmailStr)
DOMAIN_PATTERN = re.compile(r"^(?=.{1,255}$)[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)+$")
MAX_NAME_LENGTH = 100


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_domain(domain: str) -> str:
    return domain.strip().lower()


def is_valid_email(email: str) -> bool:
    try:
        EMAIL_ADAPTER.validate_python(normalize_email(email))
    except ValidationError:
        return False
    return True


def check_principal_fields(
    credentials: CredentialVerifier,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
) -> Optional[str]:
    """Return the first validation problem, or None"""
    if not is_valid_email(email):
        return "Invalid email address"
    for label, value in (("first_name", first_name), ("last_name", last_name)):
        if not value or not value.strip():
            return f"{label} is required"
        if len(value) > MAX_NAME_LENGTH:
            return f"{label} must be at most {MAX_NAME_LENGTH} characters"
    return credentials.validate_strength(password)


def check_domain(domain: Optional[str]) -> Optional[str]:
    if not domain or not DOMAIN_PATTERN.match(normalize_domain(domain)):
        return "Invalid company domain"
    return None
