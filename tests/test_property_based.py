"""
Property-based tests for context emission using Hypothesis.

Random trees are built from four node types that differ in vocabulary
and declared terms.  For every node of every tree the emitted
``@context`` must follow the three outcomes of the context stack, and
the stack must be empty once serialization returns or raises.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jsonld_vocab import (
    ContextStack,
    DictWriter,
    JsonLdSerializer,
    Term,
    TypeDescriptor,
    VocabRegistry,
)

SCHEMA = "http://schema.org/"
OFFERS = "http://example.org/offers/"


class Thing:
    def __init__(self, children):
        self.children = children


class Offerish(Thing):
    pass


class Termed(Thing):
    pass


class Mixed(Thing):
    pass


class Bomb:
    @property
    def fuse(self):
        raise RuntimeError("boom")


_registry = VocabRegistry()
_registry.register_type(Offerish, TypeDescriptor(vocab=OFFERS))
_registry.register_type(Termed, TypeDescriptor(term=Term("gr", "http://gr/")))
_registry.register_type(Mixed, TypeDescriptor(vocab=OFFERS, terms=[Term("a", "A"), Term("b", "B")]))

VOCAB = {Thing: SCHEMA, Offerish: OFFERS, Termed: SCHEMA, Mixed: OFFERS}
TERMS = {
    Thing: {},
    Offerish: {},
    Termed: {"gr": "http://gr/"},
    Mixed: {"a": "A", "b": "B"},
}

# ═══════════════════════════════════════════════════════════════════
# Strategies
# ═══════════════════════════════════════════════════════════════════

_kinds = st.sampled_from([Thing, Offerish, Termed, Mixed])

trees = st.recursive(
    _kinds.map(lambda cls: cls([])),
    lambda kids: st.builds(lambda cls, ch: cls(ch), _kinds, st.lists(kids, max_size=3)),
    max_leaves=25,
)

bombed_trees = st.recursive(
    st.one_of(_kinds.map(lambda cls: cls([])), st.builds(Bomb)),
    lambda kids: st.builds(lambda cls, ch: cls(ch), _kinds, st.lists(kids, max_size=3)),
    max_leaves=25,
)


def _has_bomb(node):
    if isinstance(node, Bomb):
        return True
    return any(_has_bomb(c) for c in node.children)


def _check(node, out, parent_vocab):
    vocab = VOCAB[type(node)]
    terms = TERMS[type(node)]
    if parent_vocab != vocab:
        assert out["@context"] == {"@vocab": vocab, **terms}
    elif terms:
        assert out["@context"] == terms
        assert "@vocab" not in out["@context"]
    else:
        assert "@context" not in out
    assert out["@type"] == type(node).__name__
    assert len(out["children"]) == len(node.children)
    for child, child_out in zip(node.children, out["children"]):
        _check(child, child_out, vocab)


# ═══════════════════════════════════════════════════════════════════
# Properties
# ═══════════════════════════════════════════════════════════════════


class TestContextProperties:
    @given(tree=trees)
    @settings(max_examples=200)
    def test_context_outcomes(self, tree):
        doc = JsonLdSerializer(_registry).to_jsonld(tree)
        _check(tree, doc, None)

    @given(tree=trees)
    def test_stack_empty_after_success(self, tree):
        stack = ContextStack()
        JsonLdSerializer(_registry).serialize(tree, DictWriter(), stack)
        assert len(stack) == 0

    @given(tree=bombed_trees)
    @settings(max_examples=200)
    def test_stack_empty_after_error(self, tree):
        stack = ContextStack()
        serializer = JsonLdSerializer(_registry)
        if _has_bomb(tree):
            with pytest.raises(RuntimeError):
                serializer.serialize(tree, DictWriter(), stack)
        else:
            serializer.serialize(tree, DictWriter(), stack)
        assert len(stack) == 0

    @given(trees=st.lists(trees, min_size=1, max_size=4))
    def test_siblings_independent_of_earlier_subtrees(self, trees):
        doc = JsonLdSerializer(_registry).to_jsonld(trees)
        for tree, out in zip(trees, doc):
            _check(tree, out, None)
