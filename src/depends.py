from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims, TokenService
from src.domain.errors import TOKEN_INVALID
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False so a missing header is reported in the service's error shape
security = HTTPBearer(auto_error=False)

token_service = TokenService(
    secret=ApplicationConfig.JWT_SECRET,
    expires_seconds=ApplicationConfig.JWT_EXPIRES_SECONDS,
    algorithm=ApplicationConfig.JWT_ALGORITHM,
    issuer=ApplicationConfig.JWT_ISSUER,
    audience=ApplicationConfig.JWT_AUDIENCE,
)

credential_verifier = CredentialVerifier(rounds=ApplicationConfig.BCRYPT_ROUNDS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service() -> TokenService:
    return token_service


def get_credential_verifier() -> CredentialVerifier:
    return credential_verifier


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Dependency to extract and verify the bearer token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header
        tokens: Token service used for verification

    Returns:
        Verified TokenClaims (user_id, tenant_id, role)

    Raises:
        ClientError: 401 TOKEN_INVALID or TOKEN_EXPIRED
    """
    if credentials is None:
        raise ClientError(Error(TOKEN_INVALID, "Missing bearer token"), status_code=401)

    result = tokens.verify(credentials.credentials)
    if result.is_err():
        raise ClientError(result.error, status_code=401)

    return result.value
