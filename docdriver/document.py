"""Document envelopes and batch results."""

from dataclasses import dataclass
from typing import Any, NamedTuple


@dataclass(frozen=True)
class Cas:
    """Opaque version token returned by the store.

    Only the store compares tokens. Callers hand them back unchanged
    (e.g. ``upsert(..., cas=doc.cas)``).
    """

    token: int

    def __repr__(self) -> str:
        return f"Cas({self.token:#x})"


@dataclass(frozen=True)
class Document:
    """A retrieved document: its value plus its version token."""

    value: Any
    cas: Cas


class GetResult(NamedTuple):
    """Outcome of a batch ``get()``.

    Attributes:
        hits: Documents for found keys, in request order.
        misses: Keys the store reported as not found, in request order.
    """

    hits: list[Document]
    misses: list[str]
