"""Base exception for the OCI tag audit."""


class TagAuditError(Exception):
    """Base class for every error raised by the audit pipeline."""

    pass
