"""Custom exception hierarchy for reclassification errors."""


class ReclassifierError(Exception):
    """Base exception for all reclassifier errors."""

    def __init__(self, message: str, *args, **kwargs):
        """Initialize error with message."""
        self.message = message
        super().__init__(message, *args, **kwargs)


class ValidationError(ReclassifierError):
    """Raised when a product record cannot be read into a snapshot."""
    pass


class DatabaseError(ReclassifierError):
    """Raised when database operations fail."""
    pass


class TaxonomyError(ReclassifierError):
    """Raised when a taxonomy definition is inconsistent."""
    pass


class RunAlreadyActiveError(ReclassifierError):
    """Raised when another auto-reseed run already holds the running slot."""

    def __init__(self, message: str = "auto-reseed run already running", *args, **kwargs):
        super().__init__(message, *args, **kwargs)
