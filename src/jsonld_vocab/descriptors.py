"""Static declarations attached to packages, types, mixins and members.

These dataclasses are the explicit replacement for annotation scanning:
a type's vocabulary, exposed label, terms and exposed members are
declared once, at import time, and looked up by the resolver while
serializing.

Example::

    register_type(Offer, TypeDescriptor(vocab="http://example.org/offers/"))

    @dataclass
    class Product:
        name: str
        productID: str = field(metadata=expose("http://schema.org/productID"))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from jsonld_vocab._constants import EXPOSE_METADATA_KEY, UNWRAPPED_METADATA_KEY


@dataclass(frozen=True)
class Term:
    """A single term definition: ``define`` maps to ``as_`` in ``@context``."""

    define: str
    as_: str


@dataclass(frozen=True)
class Member:
    """An exposed field or property of a type.

    Parameters
    ----------
    name:
        Output key, also the attribute read from the instance unless
        *getter* is given.
    expose:
        Exposed label.  For ordinary members it becomes the term value
        ``name -> expose``; for enum-valued members it becomes the
        ``@id`` of the structured term.
    unwrapped:
        Inline a nested node's fields into the parent's object body.
    getter:
        Callable taking the instance and returning the member value.
    """

    name: str
    expose: Optional[str] = None
    unwrapped: bool = False
    getter: Optional[Callable[[Any], Any]] = None

    def value_of(self, obj: Any) -> Any:
        if self.getter is not None:
            return self.getter(obj)
        return getattr(obj, self.name)


@dataclass(frozen=True)
class PackageDescriptor:
    """Declarations attached to a Python package or module name.

    ``term`` and ``terms`` are mutually exclusive; declaring both is
    reported as a :class:`~jsonld_vocab.terms.TermDefinitionError` when
    the terms are first collected.
    """

    vocab: Optional[str] = None
    term: Optional[Term] = None
    terms: Optional[Sequence[Term]] = None


@dataclass(frozen=True)
class TypeDescriptor:
    """Declarations attached to a type, or to a mixin overriding a type.

    ``members`` set to ``None`` means "discover members"; an empty
    sequence exposes nothing.  Members of a mixin descriptor are not
    consulted.
    """

    vocab: Optional[str] = None
    expose: Optional[str] = None
    term: Optional[Term] = None
    terms: Optional[Sequence[Term]] = None
    members: Optional[Sequence[Member]] = None


def expose(label: str) -> dict[str, Any]:
    """Dataclass field metadata giving the field an exposed label."""
    return {EXPOSE_METADATA_KEY: label}


def unwrapped() -> dict[str, Any]:
    """Dataclass field metadata marking a nested node as inlined."""
    return {UNWRAPPED_METADATA_KEY: True}
