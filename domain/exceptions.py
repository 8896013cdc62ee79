"""Domain exceptions for business rule violations and storage faults."""


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when input validation fails."""


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (DB, network, etc.)."""


class LedgerQueryError(InfrastructureError):
    """Raised when the file state ledger cannot be queried."""


class LedgerWriteError(InfrastructureError):
    """Raised when a state transition cannot be written to the ledger."""


class CatalogLookupError(InfrastructureError):
    """Raised when the local file catalog cannot be queried."""


class RemoteTierError(InfrastructureError):
    """Base exception for faults reported while checking the remote tier."""


class RemoteTransportError(RemoteTierError):
    """Raised when the remote tier is unreachable or returns a malformed response."""


class RemoteVerificationError(RemoteTierError):
    """Raised when a file is missing from the remote tier or its size does not match."""


class LocalDeletionError(InfrastructureError):
    """Raised when the local copy of a file cannot be removed."""
