"""
Credential Verifier

bcrypt hashing and comparison plus the password strength rules applied
before any account is created.
"""

import re
from typing import Optional

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
MIN_PASSWORD_LENGTH = 8


class CredentialVerifier:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash_password(self, plain: str) -> str:
        return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify_password(self, plain: str, password_hash: Optional[str]) -> bool:
        """
        Constant-time comparison.

        When there is no stored hash (unknown principal) the password is
        still checked against a dummy hash so response timing stays uniform.
        """
        encoded = plain.encode()
        if len(encoded) > MAX_PASSWORD_BYTES:
            encoded = encoded[:MAX_PASSWORD_BYTES]

        if password_hash is None:
            bcrypt.checkpw(encoded, self._get_dummy_hash())
            return False

        try:
            return bcrypt.checkpw(encoded, password_hash.encode())
        except ValueError:
            # Malformed stored hash
            return False

    def validate_strength(self, plain: str) -> Optional[str]:
        """Return why a password is too weak, or None if it is acceptable"""
        if len(plain) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if len(plain.encode()) > MAX_PASSWORD_BYTES:
            return f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        if not re.search(r"[a-z]", plain):
            return "Password must contain a lowercase letter"
        if not re.search(r"[A-Z]", plain):
            return "Password must contain an uppercase letter"
        if not re.search(r"\d", plain):
            return "Password must contain a digit"
        return None

    def _get_dummy_hash(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))
        return self._dummy_hash
