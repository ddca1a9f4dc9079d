"""
Keywords and defaults shared across the jsonld-vocab modules.

Kept in one place to avoid circular imports between the resolver,
the term collector and the serializer.
"""

from __future__ import annotations

# ── JSON-LD keywords ───────────────────────────────────────────────

AT_CONTEXT = "@context"
AT_VOCAB = "@vocab"
AT_TYPE = "@type"
AT_ID = "@id"

# ── Defaults ───────────────────────────────────────────────────────

DEFAULT_VOCAB = "http://schema.org/"
"""Vocabulary used when no mixin, type or package declares one."""

# ── Dataclass field metadata keys ──────────────────────────────────
#
# Set through :func:`jsonld_vocab.descriptors.expose` and
# :func:`jsonld_vocab.descriptors.unwrapped` rather than by hand.

EXPOSE_METADATA_KEY = "jsonld_vocab.expose"
UNWRAPPED_METADATA_KEY = "jsonld_vocab.unwrapped"
