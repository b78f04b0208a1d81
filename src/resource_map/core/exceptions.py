"""Custom exceptions for the resource map core."""


class ResourceMapError(RuntimeError):
    """Base exception for resource map errors."""
    pass


class InvalidRecordError(ResourceMapError, ValueError):
    """Raised when a stored record does not match the UserData shape."""
    pass


class RasterizationError(ResourceMapError):
    """
    Raised when a card cannot be turned into an image.

    Attributes:
        target: Name of the card being rendered, if known.
    """
    def __init__(self, message: str, target: str = ""):
        super().__init__(message)
        self.target = target
