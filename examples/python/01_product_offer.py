"""
Example 01: Products and Offers
===============================

Serializes a small store catalogue.  Products use schema.org, offers
live in their own vocabulary, and the availability enum is mapped to
vocabulary terms.

Use case: A shop API returns products as JSON-LD without hand-writing
any ``@context`` blocks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from jsonld_vocab import (
    Member,
    PackageDescriptor,
    Term,
    TypeDescriptor,
    VocabRegistry,
    dumps,
    expose,
)

registry = VocabRegistry()


class Availability(Enum):
    IN_STOCK = 1
    PRE_ORDER = 2
    DISCONTINUED = 3


@dataclass
class Offer:
    price: str
    priceCurrency: str = "EUR"
    availability: Optional[Availability] = None


@dataclass
class Product:
    name: str
    productID: str = field(metadata=expose("http://schema.org/productID"))
    offers: Optional[Offer] = None
    accessories: list = field(default_factory=list)


# ── 1. Declarations ──────────────────────────────────────────────

registry.register_package(__name__, PackageDescriptor(
    term=Term("gr", "http://purl.org/goodrelations/v1#"),
))
registry.register_type(Offer, TypeDescriptor(
    vocab="http://example.org/offers/",
    members=[
        Member("price"),
        Member("priceCurrency"),
        Member("availability", expose="http://schema.org/availability"),
    ],
))
registry.register_enum(Availability, {"DISCONTINUED": "Discontinued"})

# ── 2. A product with a nested offer ─────────────────────────────

print("=== 1. Product with offer ===\n")

widget = Product("Widget", "w-1", offers=Offer("9.99", availability=Availability.PRE_ORDER))
print(dumps(widget, registry, indent=2))

# ── 3. Accessories in the same vocabulary ────────────────────────

print("\n=== 2. Accessories ===\n")

widget.accessories = [Product("Cable", "c-1"), Product("Case", "c-2")]
print(dumps(widget, registry, indent=2, skip_none=True))
