"""Custom exception hierarchy for signedtoken."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes, one per distinguishable failure."""

    # Codec construction
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Token structure and content
    INVALID_FORMAT = "INVALID_FORMAT"
    MALFORMED_ENCODING = "MALFORMED_ENCODING"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"

    # Trust checks
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    EXPIRED = "EXPIRED"

    # Login caller
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class TokenError(Exception):
    """
    Base exception for all signedtoken errors.

    Provides structured errors with:
    - Human-readable message
    - Machine-readable error code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a plain dictionary.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class UnsupportedAlgorithmError(TokenError):
    """Algorithm identifier is not in the registry."""

    def __init__(self, algorithm: str):
        super().__init__(
            f"Algorithm `{algorithm}` not supported",
            ErrorCode.UNSUPPORTED_ALGORITHM,
            details={"algorithm": algorithm}
        )


class InvalidFormatError(TokenError):
    """Token does not split into exactly three segments."""

    def __init__(self, message: str = "Invalid token format", segments: Optional[int] = None):
        details = {"segments": segments} if segments is not None else {}
        super().__init__(
            message,
            ErrorCode.INVALID_FORMAT,
            details=details
        )


class MalformedPayloadError(TokenError):
    """Payload is not a JSON object, or its reserved fields are unusable."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.MALFORMED_PAYLOAD):
        super().__init__(message, error_code)


class MalformedEncodingError(MalformedPayloadError):
    """Segment is not valid base64url."""

    def __init__(self, message: str = "Invalid base64url encoding"):
        super().__init__(message, ErrorCode.MALFORMED_ENCODING)


class InvalidSignatureError(TokenError):
    """Signature segment does not match the header and payload."""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(
            message,
            ErrorCode.INVALID_SIGNATURE,
        )


class ExpiredTokenError(TokenError):
    """Token expiry timestamp has passed."""

    def __init__(self, expired_at: int):
        super().__init__(
            "Token has expired",
            ErrorCode.EXPIRED,
            details={"expired_at": expired_at}
        )


class AuthenticationError(TokenError):
    """Submitted credentials do not match the stored ones."""

    def __init__(self, message: str = "Invalid username or password", field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            details=details
        )

    @property
    def field(self) -> Optional[str]:
        return self.details.get("field")


class ValidationError(TokenError):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            details=details
        )
