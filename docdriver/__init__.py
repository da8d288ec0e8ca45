"""docdriver: retrieval coordinator for document key-value stores."""

from .bucket import Bucket
from .callbacks import complete
from .document import Cas, Document, GetResult
from .driver import Driver, create
from .errors import (
    CasMismatch,
    DocumentNotFound,
    DriverError,
    InvalidRequest,
    StoreError,
)
from .kv.base import KVStore
from .operations import Operation
from .store import StoreClient, bucket

OPERATIONS = Operation

__all__ = [
    "Bucket",
    "Cas",
    "CasMismatch",
    "Document",
    "DocumentNotFound",
    "Driver",
    "DriverError",
    "GetResult",
    "InvalidRequest",
    "KVStore",
    "OPERATIONS",
    "Operation",
    "StoreClient",
    "StoreError",
    "bucket",
    "complete",
    "create",
]
