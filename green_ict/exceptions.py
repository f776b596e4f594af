"""
Exceptions raised by the Green ICT audit pipeline.
"""


class GreenIctAuditError(Exception):
    """Base class for audit failures."""


class AuditConfigurationError(GreenIctAuditError):
    """The audit cannot start: storage settings or methodology profile missing."""


class AuditStorageError(GreenIctAuditError):
    """A ledger read/write or the report persistence failed; carries the storage message."""
