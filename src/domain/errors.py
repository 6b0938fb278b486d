"""
Error codes returned by use cases.

Every failure a use case can produce maps onto one of these codes; the API
layer translates them to HTTP statuses in src/api/error.py.
"""

INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
TOKEN_EXPIRED = "TOKEN_EXPIRED"
TOKEN_INVALID = "TOKEN_INVALID"
FORBIDDEN = "FORBIDDEN"
NOT_FOUND = "NOT_FOUND"
ALREADY_RESOLVED = "ALREADY_RESOLVED"
CONFLICT = "CONFLICT"
VALIDATION_FAILED = "VALIDATION_FAILED"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Login failures all collapse into this one message (no account enumeration)
INVALID_CREDENTIALS_MESSAGE = "Invalid email, company or password"
