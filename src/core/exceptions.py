from __future__ import annotations
from typing import Any


class APIError(Exception):
    def __init__(self, *, message: str, code: str, status: int, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.errors = errors
        self.extra = extra or {}


class DomainError(APIError):
    """Base des erreurs métier avec code/statut par défaut"""
    default_message = "Error"
    default_code = "ERROR"
    default_status = 400

    def __init__(self, message: str | None = None, *, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(
            message=message or self.default_message,
            code=self.default_code,
            status=self.default_status,
            errors=errors,
            extra=extra,
        )


class ValidationError(DomainError):
    """Missing or malformed input, detected before any network call"""
    default_message = "Validation error"
    default_code = "VALIDATION_ERROR"
    default_status = 400


class DuplicateCertificateError(DomainError):
    default_message = "This student already has a certificate from this institute."
    default_code = "DUPLICATE_CERTIFICATE"
    default_status = 400


class InvalidReferenceError(DomainError):
    """Degree or department name not found in the institute lists"""
    default_message = "Invalid Degree or Department selection"
    default_code = "INVALID_REFERENCE"
    default_status = 400


class CachePersistenceError(DomainError):
    default_message = "Failed to save certificate to the metadata cache"
    default_code = "CACHE_PERSISTENCE_ERROR"
    default_status = 502


class ChainWriteError(DomainError):
    """Wallet rejection, revert or lost receipt. `reason` carries the revert reason when known."""
    default_message = "Blockchain transaction failed"
    default_code = "CHAIN_WRITE_ERROR"
    default_status = 502

    def __init__(self, message: str | None = None, *, reason: str | None = None, tx_hash: str | None = None):
        extra = {}
        if reason:
            extra["reason"] = reason
        if tx_hash:
            extra["tx_hash"] = tx_hash
        super().__init__(message, extra=extra)
        self.reason = reason
        self.tx_hash = tx_hash


class ChainReadError(DomainError):
    """RPC node unreachable or unusable answer on a contract call()"""
    default_message = "Blockchain read failed"
    default_code = "CHAIN_READ_ERROR"
    default_status = 502


class NotFoundError(DomainError):
    """Ressource non trouvée"""
    default_message = "Not found"
    default_code = "NOT_FOUND"
    default_status = 404


class PermissionDeniedError(DomainError):
    """Erreur de permission"""
    default_message = "Permission denied"
    default_code = "FORBIDDEN"
    default_status = 403
