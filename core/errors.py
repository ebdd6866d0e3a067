"""Error taxonomy shared by the query, extraction and reconciliation layers."""


class TestSourceError(RuntimeError):
    """Base class for every failure raised by a tests source."""

    __test__ = False


class ValidationError(TestSourceError):
    """Raised when a query or one of its conditions is malformed."""


class ConfigurationError(TestSourceError):
    """Raised when a mandatory source parameter is unset."""


class StructuralError(TestSourceError):
    """Raised when a test method cannot be turned into a test unit."""
