"""
Exception hierarchy for the bond catalog.

Only genuinely invalid inputs raise.  An empty filtered catalog is a
normal outcome and is returned as an empty list, never as an exception.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class InvalidArgument(CatalogError, ValueError):
    """Raised for malformed sort keys and domain-invalid valuation inputs."""
