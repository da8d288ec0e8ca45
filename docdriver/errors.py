"""docdriver error types."""


class DriverError(Exception):
    """Base class for errors raised by docdriver."""


class DocumentNotFound(DriverError, LookupError):
    """Raised when a key has no document.

    For a single-key ``Driver.get()`` this is the failure outcome. For a
    batch ``get()`` it is never raised; the key is reported as a miss.

    Attributes:
        key: The key that was looked up.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Document not found: {key}")


class StoreError(DriverError):
    """Raised by the bundled store when an operation fails.

    Covers backend, encoding and I/O failures unrelated to whether the
    key exists. The driver propagates these unchanged and never retries.
    """


class CasMismatch(StoreError):
    """Raised when a CAS-guarded write sees a different version token.

    Another writer updated the document after the caller read it.

    Attributes:
        key: The key whose write was rejected.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"CAS mismatch on key: {key}")


class InvalidRequest(DriverError, TypeError):
    """Raised synchronously when a call has an invalid shape."""
