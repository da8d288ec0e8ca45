"""Operation kinds callers can tag or branch on."""

from enum import Enum


class Operation(Enum):
    """Logical operation kinds. Metadata only; carries no behavior."""

    UPSERT = "upsert"
    REMOVE = "remove"
    NOOP = "noop"
