"""Metadata resolution for a single node.

Precedence, highest first:

* vocabulary: mixin > type > package > ``DEFAULT_VOCAB``
* type label: mixin ``expose`` > type ``expose`` > ``type(obj).__name__``

A missing descriptor at any level simply falls through to the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from jsonld_vocab._constants import DEFAULT_VOCAB
from jsonld_vocab.descriptors import Member
from jsonld_vocab.registry import DEFAULT_REGISTRY, VocabRegistry
from jsonld_vocab.terms import TermValue, declared_terms, member_terms, merge_terms


@dataclass
class Node:
    """Everything needed to write one object of the graph."""

    vocab: str
    type_label: str
    terms: dict[str, TermValue] = field(default_factory=dict)
    fields: list[tuple[Member, Any]] = field(default_factory=list)


class MetadataResolver:
    """Resolves vocabulary, ``@type`` and terms against a registry."""

    def __init__(
        self,
        registry: Optional[VocabRegistry] = None,
        default_vocab: str = DEFAULT_VOCAB,
    ):
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.default_vocab = default_vocab

    def resolve_vocabulary(self, obj: Any) -> str:
        cls = type(obj)
        for descriptor in (
            self.registry.mixin_for(cls),
            self.registry.type_for(cls),
            self.registry.package_for(cls)[1],
        ):
            if descriptor is not None and descriptor.vocab is not None:
                return descriptor.vocab
        return self.default_vocab

    def resolve_type(self, obj: Any) -> str:
        cls = type(obj)
        for descriptor in (self.registry.mixin_for(cls), self.registry.type_for(cls)):
            if descriptor is not None and descriptor.expose is not None:
                return descriptor.expose
        return cls.__name__

    def read_fields(self, obj: Any) -> list[tuple[Member, Any]]:
        """Exposed ``(member, value)`` pairs of *obj*, in output order."""
        return [(m, m.value_of(obj)) for m in self.registry.members_for(obj)]

    def collect_terms(
        self,
        obj: Any,
        fields: Optional[list[tuple[Member, Any]]] = None,
    ) -> dict[str, TermValue]:
        """Merged term mapping of *obj*.

        Raises
        ------
        TermDefinitionError
            If any declaration scope is inconsistent.
        """
        cls = type(obj)
        qualname = f"{cls.__module__}.{cls.__qualname__}"

        package_name, package = self.registry.package_for(cls)
        type_ = self.registry.type_for(cls)
        mixin = self.registry.mixin_for(cls)

        package_terms = (
            declared_terms(package.term, package.terms, package_name)
            if package is not None else {}
        )
        type_terms = (
            declared_terms(type_.term, type_.terms, qualname)
            if type_ is not None else {}
        )
        mixin_terms = (
            declared_terms(mixin.term, mixin.terms, f"mixin for {qualname}")
            if mixin is not None else {}
        )

        if fields is None:
            fields = self.read_fields(obj)
        return merge_terms(
            package_terms,
            type_terms,
            mixin_terms,
            member_terms(fields, self.registry.enum_label),
        )

    def describe(self, obj: Any) -> Node:
        """Resolve every piece of node metadata before any output is written."""
        fields = self.read_fields(obj)
        return Node(
            vocab=self.resolve_vocabulary(obj),
            type_label=self.resolve_type(obj),
            terms=self.collect_terms(obj, fields),
            fields=fields,
        )
