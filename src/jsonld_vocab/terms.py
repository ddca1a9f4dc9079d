"""Term collection for the local ``@context`` of a node.

Terms come from four sources, merged in this order:

1. the package declaration,
2. the type declaration,
3. the mixin declaration,
4. the node's exposed members.

Declarative levels overwrite each other in that order.  Member-derived
terms only fill keys the declarative levels left open.

Enum-valued members contribute two entries: a structured term under the
member name, rendered as ``{"@id": ..., "@type": "@vocab"}``, and a
value-label entry mapping the constant name to its exposed label or its
camel-cased name (``PRE_ORDER`` -> ``PreOrder``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from jsonld_vocab._constants import AT_ID, AT_TYPE, AT_VOCAB
from jsonld_vocab.descriptors import Member, Term


class TermDefinitionError(ValueError):
    """A static term declaration is inconsistent.

    Raised when an element declares both ``term`` and ``terms``, or
    defines the same term twice within one scope.
    """

    def __init__(self, message: str, scope: str) -> None:
        super().__init__(message)
        self.scope = scope


@dataclass(frozen=True)
class EnumTerm:
    """Structured term for an enum-valued member."""

    id: Optional[str] = None

    def to_json(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.id is not None:
            out[AT_ID] = self.id
        out[AT_TYPE] = AT_VOCAB
        return out


TermValue = Union[str, EnumTerm]
EnumLabelLookup = Callable[[Enum], Optional[str]]


def upper_to_camel_case(name: str) -> str:
    """``PRE_ORDER`` -> ``PreOrder``."""
    return "".join(part.capitalize() for part in name.split("_"))


def declared_terms(
    term: Optional[Term],
    terms: Optional[Sequence[Term]],
    scope: str,
) -> dict[str, TermValue]:
    """Return the terms one element declares, in declaration order.

    Raises
    ------
    TermDefinitionError
        If both *term* and *terms* are given, or a term is defined twice.
    """
    if term is not None and terms is not None:
        raise TermDefinitionError(
            f"found both term and terms in {scope}, use either one or the other",
            scope,
        )
    out: dict[str, TermValue] = {}
    for t in terms or ():
        if t.define in out:
            raise TermDefinitionError(
                f"duplicate definition of term '{t.define}' in {scope}",
                scope,
            )
        out[t.define] = t.as_
    if term is not None:
        out[term.define] = term.as_
    return out


def member_terms(
    fields: Iterable[tuple[Member, Any]],
    enum_label: EnumLabelLookup,
) -> dict[str, TermValue]:
    """Terms contributed by exposed members.

    *enum_label* returns the exposed label of an enum constant, or
    ``None`` when the constant has none.
    """
    out: dict[str, TermValue] = {}
    for member, value in fields:
        if isinstance(value, Enum):
            out[member.name] = EnumTerm(member.expose)
            label = enum_label(value)
            out[value.name] = label if label is not None else upper_to_camel_case(value.name)
        elif value is None:
            continue
        elif member.expose is not None:
            out[member.name] = member.expose
    return out


def merge_terms(
    package: dict[str, TermValue],
    type_: dict[str, TermValue],
    mixin: dict[str, TermValue],
    members: dict[str, TermValue],
) -> dict[str, TermValue]:
    """Merge the four term sources by precedence."""
    merged: dict[str, TermValue] = dict(package)
    merged.update(type_)
    merged.update(mixin)
    for key, value in members.items():
        merged.setdefault(key, value)
    return merged
