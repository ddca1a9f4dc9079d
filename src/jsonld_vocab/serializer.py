"""
Object graph to JSON-LD serialization.

Walks an arbitrary object graph depth-first and, for every object that
is not a plain value, mapping or iterable, writes::

    {"@context": {...}?, "@type": "...", <fields>...}

The ``@context`` is only written where the enclosing context does not
already cover the node (see :mod:`jsonld_vocab.context_stack`).

Usage::

    from jsonld_vocab import to_jsonld, dumps

    doc = to_jsonld(product)
    text = dumps(product, indent=2)

Plain values are written without an envelope: dates and times as
ISO 8601 strings, ``Decimal``, ``UUID`` and paths as strings, binary
data as base64, enum constants by name.  Other iterables become arrays.
"""

from __future__ import annotations

import base64
import datetime
import json
import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional
from uuid import UUID

from jsonld_vocab._constants import AT_TYPE, DEFAULT_VOCAB
from jsonld_vocab.context_stack import ContextStack
from jsonld_vocab.registry import VocabRegistry
from jsonld_vocab.resolver import MetadataResolver
from jsonld_vocab.writer import DictWriter, StructuredWriter

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)
_ISO_TYPES = (datetime.date, datetime.time)
_STRING_TYPES = (Decimal, UUID, PurePath)
_BINARY_TYPES = (bytes, bytearray, memoryview)
_PLAIN_TYPES = _SCALARS + _ISO_TYPES + _STRING_TYPES + _BINARY_TYPES + (Enum,)


class JsonLdSerializer:
    """Serializes object graphs with vocabulary-aware ``@context`` blocks.

    Parameters
    ----------
    registry:
        Declarations to resolve against; ``DEFAULT_REGISTRY`` when omitted.
    default_vocab:
        Vocabulary for nodes nothing else declares one for.
    skip_none:
        Omit ``None``-valued fields instead of writing ``null``.
    """

    def __init__(
        self,
        registry: Optional[VocabRegistry] = None,
        default_vocab: str = DEFAULT_VOCAB,
        skip_none: bool = False,
    ):
        self.resolver = MetadataResolver(registry, default_vocab)
        self.skip_none = skip_none

    def serialize(
        self,
        value: Any,
        writer: StructuredWriter,
        stack: Optional[ContextStack] = None,
    ) -> None:
        """Write *value* to *writer*.

        A new :class:`ContextStack` is used unless *stack* is given.
        Errors from the writer or from member getters propagate; every
        node entered before the error has been left again.
        """
        if stack is None:
            stack = ContextStack()
        self._write_value(value, writer, stack)

    def to_jsonld(self, value: Any) -> Any:
        writer = DictWriter()
        self.serialize(value, writer)
        return writer.result

    # ── Walker ───────────────────────────────────────────────────

    def _write_value(self, value: Any, writer: StructuredWriter, stack: ContextStack) -> None:
        if value is None or isinstance(value, _PLAIN_TYPES):
            writer.write_value(_plain(value))
        elif isinstance(value, Mapping):
            writer.start_object()
            for key, item in value.items():
                if item is None and self.skip_none:
                    continue
                writer.field_name(str(key))
                self._write_value(item, writer, stack)
            writer.end_object()
        elif isinstance(value, Iterable):
            writer.start_array()
            for item in value:
                self._write_value(item, writer, stack)
            writer.end_array()
        else:
            self._write_node(value, writer, stack, unwrapping=False)

    def _write_node(
        self,
        obj: Any,
        writer: StructuredWriter,
        stack: ContextStack,
        unwrapping: bool,
    ) -> None:
        node = self.resolver.describe(obj)
        logger.debug("node %s (vocab %s, unwrapping=%s)", node.type_label, node.vocab, unwrapping)

        if not unwrapping:
            writer.start_object()
        with stack.entered(node.vocab, node.terms, writer):
            writer.write_string_field(AT_TYPE, node.type_label)
            for member, value in node.fields:
                if value is None and self.skip_none:
                    continue
                if member.unwrapped and _is_node(value):
                    self._write_node(value, writer, stack, unwrapping=True)
                    continue
                writer.field_name(member.name)
                self._write_value(value, writer, stack)
            if not unwrapping:
                writer.end_object()


def _plain(value: Any) -> Any:
    """JSON form of a value written without an envelope."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, _ISO_TYPES):
        return value.isoformat()
    if isinstance(value, _STRING_TYPES):
        return str(value)
    if isinstance(value, _BINARY_TYPES):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def _is_node(value: Any) -> bool:
    return not (
        value is None
        or isinstance(value, (_PLAIN_TYPES, Mapping, Iterable))
    )


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------


def to_jsonld(
    value: Any,
    registry: Optional[VocabRegistry] = None,
    **options: Any,
) -> Any:
    """Serialize *value* to plain ``dict``/``list`` JSON-LD.

    *options* are passed to :class:`JsonLdSerializer`.
    """
    return JsonLdSerializer(registry, **options).to_jsonld(value)


def dumps(
    value: Any,
    registry: Optional[VocabRegistry] = None,
    *,
    default_vocab: str = DEFAULT_VOCAB,
    skip_none: bool = False,
    **json_kwargs: Any,
) -> str:
    """Serialize *value* to a JSON-LD string; *json_kwargs* go to :func:`json.dumps`."""
    doc = to_jsonld(value, registry, default_vocab=default_vocab, skip_none=skip_none)
    return json.dumps(doc, **json_kwargs)
