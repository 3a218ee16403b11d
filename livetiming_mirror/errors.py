class MirrorError(Exception):
    """Base class for errors raised by the live timing mirror."""


class ConfigurationError(MirrorError):
    """Raised at startup when the environment does not describe a usable service."""


class StorageError(MirrorError):
    """Raised by a storage driver when the backing blob store fails."""

    def __init__(self, operation: str, key: str, message: str = ""):
        self.operation = operation
        self.key = key
        detail = f"{operation} {key!r} failed"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)
