"""
CBOR output for serialized object graphs.

Encodes the document produced by :func:`jsonld_vocab.to_jsonld` with
CBOR (RFC 8949) for bandwidth-constrained transports.

Requires the ``cbor2`` package::

    pip install jsonld-vocab[cbor]
"""

from __future__ import annotations

from typing import Any, Optional

from jsonld_vocab.registry import VocabRegistry
from jsonld_vocab.serializer import to_jsonld

try:
    import cbor2

    _HAS_CBOR2 = True
except ImportError:
    _HAS_CBOR2 = False


def _require_cbor2() -> None:
    if not _HAS_CBOR2:
        raise ImportError(
            "cbor2 is required for CBOR output. "
            "Install it with: pip install jsonld-vocab[cbor]"
        )


def to_cbor(
    value: Any,
    registry: Optional[VocabRegistry] = None,
    **options: Any,
) -> bytes:
    """Serialize *value* to JSON-LD and encode it as CBOR bytes."""
    _require_cbor2()
    return cbor2.dumps(to_jsonld(value, registry, **options))


def from_cbor(data: bytes) -> Any:
    """Decode CBOR bytes produced by :func:`to_cbor`."""
    _require_cbor2()
    return cbor2.loads(data)
