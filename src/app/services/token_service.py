"""
Token Service

Issues and verifies the HS256 bearer tokens carried by every protected
request. Stateless: it never touches the store, and tokens are never
persisted. Invalidation is purely time-based.
"""

import logging
from datetime import UTC, datetime
from typing import Callable, Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from src.domain.authorization import is_platform_role
from src.domain.entities import Role
from src.domain.errors import TOKEN_EXPIRED, TOKEN_INVALID
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

# tenant_id claim value for platform-tier principals
PLATFORM_TENANT = "platform"


class TokenClaims(BaseModel):
    """Verified token payload"""

    user_id: UUID
    tenant_id: Optional[UUID]
    role: Role
    issued_at: datetime
    expires_at: datetime

    @property
    def is_platform(self) -> bool:
        return is_platform_role(self.role)


class TokenService:
    """
    HS256 token issue/verify.

    The secret, lifetime, issuer, audience and clock are all injected, so
    tests can construct one without touching ApplicationConfig.
    """

    def __init__(
        self,
        secret: str,
        expires_seconds: int = 3600,
        algorithm: str = "HS256",
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.expires_seconds = expires_seconds
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user_id: UUID, tenant_id: Optional[UUID], role: Role) -> str:
        """
        Issue a signed token.

        Args:
            user_id: Principal ID
            tenant_id: Tenant ID, None for platform-tier principals
            role: Role to embed

        Returns:
            Encoded JWT string
        """
        # NumericDate is whole seconds; the lifetime is counted from the encoded iat
        issued_at = int(self.clock().timestamp())
        payload = {
            "user_id": str(user_id),
            "tenant_id": str(tenant_id) if tenant_id is not None else PLATFORM_TENANT,
            "role": Role(role).value,
            "iat": issued_at,
            "exp": issued_at + self.expires_seconds,
        }
        if self.issuer:
            payload["iss"] = self.issuer
        if self.audience:
            payload["aud"] = self.audience
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Verify signature, format, issuer and audience, then expiry.

        Expiry is checked last against the injected clock so that a
        tampered-and-expired token reports TOKEN_INVALID, not TOKEN_EXPIRED.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "verify_exp": False,
                    "verify_aud": self.audience is not None,
                    "verify_iss": self.issuer is not None,
                },
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return Return.err(Error(TOKEN_INVALID, "Invalid token"))

        claims = self._claims_from_payload(payload)
        if claims is None:
            return Return.err(Error(TOKEN_INVALID, "Invalid token"))

        if self.clock() >= claims.expires_at:
            return Return.err(Error(TOKEN_EXPIRED, "Token has expired"))

        return Return.ok(claims)

    def _claims_from_payload(self, payload: dict) -> Optional[TokenClaims]:
        try:
            role = Role(payload["role"])
            raw_tenant = payload["tenant_id"]
            tenant_id = None if raw_tenant == PLATFORM_TENANT else UUID(str(raw_tenant))
            claims = TokenClaims(
                user_id=UUID(str(payload["user_id"])),
                tenant_id=tenant_id,
                role=role,
                issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
            )
        except (KeyError, TypeError, ValueError, ValidationError):
            return None

        # The platform sentinel and a platform role go together
        if claims.is_platform != (claims.tenant_id is None):
            return None
        return claims
