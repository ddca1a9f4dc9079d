"""
jsonld-vocab: JSON-LD envelopes for plain Python object graphs

Decides, for every object of a graph being serialized, its vocabulary,
its ``@type`` and its local terms, and writes a ``@context`` only where
the enclosing context does not already cover the object.
"""

__version__ = "0.3.1"

from jsonld_vocab._constants import DEFAULT_VOCAB
from jsonld_vocab.descriptors import (
    Member,
    PackageDescriptor,
    Term,
    TypeDescriptor,
    expose,
    unwrapped,
)
from jsonld_vocab.registry import (
    DEFAULT_REGISTRY,
    VocabRegistry,
    jsonld_type,
    register_enum,
    register_mixin,
    register_package,
    register_type,
)
from jsonld_vocab.terms import EnumTerm, TermDefinitionError, upper_to_camel_case
from jsonld_vocab.resolver import MetadataResolver, Node
from jsonld_vocab.context_stack import ContextStack
from jsonld_vocab.writer import DictWriter, StructuredWriter
from jsonld_vocab.serializer import JsonLdSerializer, dumps, to_jsonld
from jsonld_vocab.cbor import from_cbor, to_cbor

__all__ = [
    "DEFAULT_VOCAB",
    # Declarations
    "Member",
    "PackageDescriptor",
    "Term",
    "TypeDescriptor",
    "expose",
    "unwrapped",
    # Registry
    "DEFAULT_REGISTRY",
    "VocabRegistry",
    "jsonld_type",
    "register_enum",
    "register_mixin",
    "register_package",
    "register_type",
    # Terms
    "EnumTerm",
    "TermDefinitionError",
    "upper_to_camel_case",
    # Resolution and context
    "MetadataResolver",
    "Node",
    "ContextStack",
    # Output
    "DictWriter",
    "StructuredWriter",
    "JsonLdSerializer",
    "dumps",
    "to_jsonld",
    "to_cbor",
    "from_cbor",
]
