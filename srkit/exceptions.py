"""srkit exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "SrkitError",
    "ValidationError",
    "InvalidLengthError",
    "InvalidEncodingError",
    "InconsistentKeypairError",
    "CryptoError",
    "SerializationError",
]


class SrkitError(Exception):
    """Base exception for all srkit errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(SrkitError):
    """Raised when key material fails validation."""
    pass


class InvalidLengthError(ValidationError):
    """Raised when a byte buffer does not have its fixed width."""

    def __init__(
        self,
        name: str,
        expected: int,
        actual: int,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"{name} must be {expected} bytes, got {actual}"
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.actual = actual


class InvalidEncodingError(ValidationError):
    """Raised when bytes do not encode a valid point, scalar or hex string."""
    pass


class InconsistentKeypairError(ValidationError):
    """Raised when a keypair's public key does not match its secret."""
    pass


class CryptoError(SrkitError):
    """Raised when cryptographic operation fails."""
    pass


class SerializationError(SrkitError):
    """Raised when serialization/deserialization fails."""
    pass
