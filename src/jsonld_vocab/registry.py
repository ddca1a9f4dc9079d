"""Registry of package, type, mixin and enum declarations.

A :class:`VocabRegistry` is filled at import time (``register_*`` calls
or the :func:`jsonld_type` decorator) and read during serialization.
``DEFAULT_REGISTRY`` backs the module-level helpers and is used by the
serializer when no registry is passed explicitly.

Member discovery
----------------
When a type declares no explicit ``members`` the registry derives a
member table from the class and caches it:

* dataclass fields, in declaration order, honouring
  :func:`~jsonld_vocab.descriptors.expose` and
  :func:`~jsonld_vocab.descriptors.unwrapped` metadata;
* otherwise the instance's public attributes, in insertion order,
  followed by public ``__slots__`` names that are set;
* then the public ``property`` objects of the class hierarchy.
"""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from jsonld_vocab._constants import EXPOSE_METADATA_KEY, UNWRAPPED_METADATA_KEY
from jsonld_vocab.descriptors import Member, PackageDescriptor, Term, TypeDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class VocabRegistry:
    """Declarations looked up by the metadata resolver."""

    def __init__(self) -> None:
        self._packages: dict[str, PackageDescriptor] = {}
        self._types: dict[type, TypeDescriptor] = {}
        self._mixins: dict[type, TypeDescriptor] = {}
        self._enum_labels: dict[type, dict[str, str]] = {}
        self._member_cache: dict[type, tuple[Member, ...]] = {}
        self._class_member_cache: dict[type, tuple[tuple[str, ...], tuple[Member, ...]]] = {}

    # ── Registration ─────────────────────────────────────────────

    def register_package(self, name: str, descriptor: PackageDescriptor) -> None:
        """Attach *descriptor* to the package or module *name*."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Package name must be a non-empty string, got: {name!r}")
        self._packages[name] = descriptor
        logger.debug("registered package declarations for %s", name)

    def register_type(self, cls: type, descriptor: TypeDescriptor) -> None:
        """Attach *descriptor* to *cls*."""
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got: {type(cls).__name__}")
        self._types[cls] = descriptor
        self._member_cache.pop(cls, None)
        self._class_member_cache.pop(cls, None)
        logger.debug("registered type declarations for %s", cls.__qualname__)

    def register_mixin(self, cls: type, descriptor: TypeDescriptor) -> None:
        """Attach an override descriptor to *cls*, winning over its own declarations."""
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got: {type(cls).__name__}")
        self._mixins[cls] = descriptor
        logger.debug("registered mixin declarations for %s", cls.__qualname__)

    def register_enum(self, enum_cls: type[Enum], labels: Mapping[str, str]) -> None:
        """Give constants of *enum_cls* exposed labels, keyed by constant name."""
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, Enum)):
            raise TypeError(f"Expected an Enum class, got: {enum_cls!r}")
        unknown = set(labels) - set(enum_cls.__members__)
        if unknown:
            raise ValueError(
                f"{enum_cls.__qualname__} has no constants {sorted(unknown)}"
            )
        self._enum_labels[enum_cls] = dict(labels)

    def describe(
        self,
        *,
        vocab: Optional[str] = None,
        expose: Optional[str] = None,
        term: Optional[Term] = None,
        terms: Optional[Sequence[Term]] = None,
        members: Optional[Sequence[Member]] = None,
    ) -> Callable[[T], T]:
        """Class decorator registering a :class:`TypeDescriptor`."""
        descriptor = TypeDescriptor(
            vocab=vocab, expose=expose, term=term, terms=terms, members=members,
        )

        def decorator(cls: T) -> T:
            self.register_type(cls, descriptor)
            return cls

        return decorator

    # ── Lookup ───────────────────────────────────────────────────

    def package_for(self, cls: type) -> tuple[Optional[str], Optional[PackageDescriptor]]:
        """Nearest enclosing package declaration of *cls*, with its name."""
        name = getattr(cls, "__module__", None) or ""
        while name:
            descriptor = self._packages.get(name)
            if descriptor is not None:
                return name, descriptor
            name = name.rpartition(".")[0]
        return None, None

    def type_for(self, cls: type) -> Optional[TypeDescriptor]:
        return self._types.get(cls)

    def mixin_for(self, cls: type) -> Optional[TypeDescriptor]:
        return self._mixins.get(cls)

    def enum_label(self, value: Enum) -> Optional[str]:
        labels = self._enum_labels.get(type(value))
        if labels is None:
            return None
        return labels.get(value.name)

    def members_for(self, obj: Any) -> tuple[Member, ...]:
        """Exposed members of *obj*, in output order."""
        cls = type(obj)
        descriptor = self._types.get(cls)
        if descriptor is not None and descriptor.members is not None:
            return tuple(descriptor.members)

        cached = self._member_cache.get(cls)
        if cached is not None:
            return cached

        if dataclasses.is_dataclass(obj):
            fields = tuple(
                Member(
                    f.name,
                    expose=f.metadata.get(EXPOSE_METADATA_KEY),
                    unwrapped=bool(f.metadata.get(UNWRAPPED_METADATA_KEY, False)),
                )
                for f in dataclasses.fields(obj)
                if not f.name.startswith("_")
            )
            members = fields + _properties_of(cls, {m.name for m in fields})
            self._member_cache[cls] = members
            return members

        # Plain objects: instance attributes can differ per instance, the
        # slot names and properties of the class cannot.
        class_members = self._class_member_cache.get(cls)
        if class_members is None:
            slots = _slots_of(cls)
            class_members = (slots, _properties_of(cls, set(slots)))
            self._class_member_cache[cls] = class_members
        slots, properties = class_members

        names = [n for n in getattr(obj, "__dict__", {}) if not n.startswith("_")]
        taken = set(names)
        names += [n for n in slots if n not in taken and hasattr(obj, n)]
        taken.update(names)
        members = tuple(Member(n) for n in names) + tuple(
            m for m in properties if m.name not in taken
        )
        if not members:
            logger.debug("%s exposes no members", cls.__qualname__)
        return members


def _slots_of(cls: type) -> tuple[str, ...]:
    out: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if not name.startswith("_") and name not in out:
                out.append(name)
    return tuple(out)


def _properties_of(cls: type, taken: set[str]) -> tuple[Member, ...]:
    seen = set(taken)
    out = []
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("_") and name not in seen:
                seen.add(name)
                out.append(Member(name))
    return tuple(out)


# ---------------------------------------------------------------------------
# Module-level registry and helpers
# ---------------------------------------------------------------------------

DEFAULT_REGISTRY = VocabRegistry()


def register_package(name: str, descriptor: PackageDescriptor) -> None:
    DEFAULT_REGISTRY.register_package(name, descriptor)


def register_type(cls: type, descriptor: TypeDescriptor) -> None:
    DEFAULT_REGISTRY.register_type(cls, descriptor)


def register_mixin(cls: type, descriptor: TypeDescriptor) -> None:
    DEFAULT_REGISTRY.register_mixin(cls, descriptor)


def register_enum(enum_cls: type[Enum], labels: Mapping[str, str]) -> None:
    DEFAULT_REGISTRY.register_enum(enum_cls, labels)


def jsonld_type(
    *,
    vocab: Optional[str] = None,
    expose: Optional[str] = None,
    term: Optional[Term] = None,
    terms: Optional[Sequence[Term]] = None,
    members: Optional[Sequence[Member]] = None,
) -> Callable[[T], T]:
    """Class decorator registering declarations in ``DEFAULT_REGISTRY``."""
    return DEFAULT_REGISTRY.describe(
        vocab=vocab, expose=expose, term=term, terms=terms, members=members,
    )
