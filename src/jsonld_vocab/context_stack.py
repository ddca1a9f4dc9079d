"""Per-serialization stack of active vocabularies.

One entry per node that has been entered and not yet left.  The top of
the stack is the vocabulary in force for the node currently being
written, so a nested node only needs a ``@context`` when it changes the
vocabulary or brings terms of its own:

(a) same vocabulary, no terms   -> no ``@context``
(b) same vocabulary, new terms  -> ``@context`` with the terms only
(c) different vocabulary        -> ``@context`` with ``@vocab`` and terms

A stack belongs to exactly one top-level ``serialize`` call and is
passed down the recursion explicitly.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

from jsonld_vocab._constants import AT_CONTEXT, AT_VOCAB
from jsonld_vocab.terms import EnumTerm, TermValue
from jsonld_vocab.writer import StructuredWriter

logger = logging.getLogger(__name__)


class ContextStack:
    """LIFO of vocabulary URIs for the open nodes of one call chain."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ContextStack({self._entries!r})"

    def peek(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    def push(self, vocab: str) -> None:
        self._entries.append(vocab)

    def pop(self) -> Optional[str]:
        """Remove the top entry; a no-op on an empty stack."""
        return self._entries.pop() if self._entries else None

    def enter(
        self,
        vocab: str,
        terms: Mapping[str, TermValue],
        writer: StructuredWriter,
    ) -> bool:
        """Push *vocab* and write a ``@context`` if one is needed.

        Returns whether a context was written.  If writing fails the
        pushed entry is removed again before the error propagates.
        """
        current = self.peek()
        self.push(vocab)
        try:
            vocab_changed = current is None or current != vocab
            if not vocab_changed and not terms:
                logger.debug("vocab %s unchanged and no terms, no context", vocab)
                return False

            writer.start_object_field(AT_CONTEXT)
            if vocab_changed:
                writer.write_string_field(AT_VOCAB, vocab)
            for name, value in terms.items():
                if isinstance(value, EnumTerm):
                    writer.write_object_field(name, value.to_json())
                else:
                    writer.write_string_field(name, value)
            writer.end_object()
            logger.debug(
                "wrote context (vocab %s, %d terms)",
                vocab if vocab_changed else "inherited", len(terms),
            )
            return True
        except BaseException:
            logger.debug("context write failed, popping %s", vocab)
            self.pop()
            raise

    def leave(self) -> None:
        self.pop()

    @contextmanager
    def entered(
        self,
        vocab: str,
        terms: Mapping[str, TermValue],
        writer: StructuredWriter,
    ) -> Iterator[bool]:
        """``enter`` on the way in, ``leave`` on the way out, even on error."""
        wrote = self.enter(vocab, terms, writer)
        try:
            yield wrote
        finally:
            self.leave()
