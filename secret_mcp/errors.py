"""Error kinds raised by the store and export layers.

Callers inside the package branch on the exception class (or ``kind``);
only the HTTP boundary turns them into a status code and a message.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    STORE_UNAVAILABLE = "store_unavailable"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"
    PATH_NOT_ABSOLUTE = "path_not_absolute"


class SecretStoreError(Exception):
    """Base class for store and export errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StoreUnavailable(SecretStoreError):
    """Raised when the store handle was never initialized or has been closed."""

    kind = ErrorKind.STORE_UNAVAILABLE

    def __init__(self, message: str = "Database not initialized"):
        super().__init__(message)


class DuplicateName(SecretStoreError):
    """Raised when a create or rename collides with an existing secret name."""

    kind = ErrorKind.DUPLICATE_NAME

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A secret named '{name}' already exists")


class NotFound(SecretStoreError):
    """Raised when an update targets an id that does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, secret_id: str):
        self.secret_id = secret_id
        super().__init__("Secret not found")


class PathNotAbsolute(SecretStoreError):
    """Raised when an export destination is not an absolute path."""

    kind = ErrorKind.PATH_NOT_ABSOLUTE

    def __init__(self, path: str):
        self.path = path
        super().__init__("Path must be absolute")
