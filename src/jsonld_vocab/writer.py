"""Structured output events.

The serializer only talks to a :class:`StructuredWriter`; it never
assumes a concrete format beyond ordered key/value objects, arrays and
scalars.  :class:`DictWriter` collects the events into plain Python
containers, which :func:`json.dumps` or ``cbor2.dumps`` can encode.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional, Protocol, Union


class StructuredWriter(Protocol):
    """Minimal event interface the serializer writes to."""

    def start_object(self) -> None: ...

    def end_object(self) -> None: ...

    def start_array(self) -> None: ...

    def end_array(self) -> None: ...

    def field_name(self, name: str) -> None: ...

    def write_value(self, value: Any) -> None: ...

    def write_string_field(self, name: str, value: str) -> None: ...

    def write_object_field(self, name: str, value: Mapping[str, Any]) -> None: ...

    def start_object_field(self, name: str) -> None: ...


_Container = Union[dict, list]
_UNSET = object()


class DictWriter:
    """Builds the document as nested ``dict``/``list`` values.

    Keys repeated within one object overwrite the earlier value.
    """

    def __init__(self) -> None:
        self._stack: list[_Container] = []
        self._pending: Optional[str] = None
        self._result: Any = _UNSET

    @property
    def result(self) -> Any:
        if self._stack:
            raise ValueError("Document is incomplete: unclosed object or array")
        if self._result is _UNSET:
            raise ValueError("Nothing has been written")
        return self._result

    # ── Containers ───────────────────────────────────────────────

    def start_object(self) -> None:
        obj: dict[str, Any] = {}
        self._emit(obj)
        self._stack.append(obj)

    def end_object(self) -> None:
        self._close(dict)

    def start_array(self) -> None:
        arr: list[Any] = []
        self._emit(arr)
        self._stack.append(arr)

    def end_array(self) -> None:
        self._close(list)

    # ── Fields and values ────────────────────────────────────────

    def field_name(self, name: str) -> None:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise ValueError(f"Field name {name!r} written outside an object")
        if self._pending is not None:
            raise ValueError(f"Field {self._pending!r} has no value")
        self._pending = name

    def write_value(self, value: Any) -> None:
        self._emit(value)

    def write_string_field(self, name: str, value: str) -> None:
        self.field_name(name)
        self._emit(value)

    def write_object_field(self, name: str, value: Mapping[str, Any]) -> None:
        self.field_name(name)
        self._emit(copy.deepcopy(dict(value)))

    def start_object_field(self, name: str) -> None:
        self.field_name(name)
        self.start_object()

    # ── Internals ────────────────────────────────────────────────

    def _emit(self, value: Any) -> None:
        if not self._stack:
            if self._result is not _UNSET:
                raise ValueError("Document already has a root value")
            self._result = value
            return
        top = self._stack[-1]
        if isinstance(top, list):
            top.append(value)
            return
        if self._pending is None:
            raise ValueError("Value written inside an object without a field name")
        top[self._pending] = value
        self._pending = None

    def _close(self, kind: type) -> None:
        if not self._stack or not isinstance(self._stack[-1], kind):
            raise ValueError(f"No open {kind.__name__} to close")
        if self._pending is not None:
            raise ValueError(f"Field {self._pending!r} has no value")
        self._stack.pop()
