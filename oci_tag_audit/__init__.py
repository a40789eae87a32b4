"""OCI tag audit: multi-region resource inventory and tag-compliance reports."""

__version__ = "1.0.0"
