"""Tests for term declaration, member-derived terms and merge precedence."""

from enum import Enum

import pytest

from jsonld_vocab.descriptors import Member, Term
from jsonld_vocab.terms import (
    EnumTerm,
    TermDefinitionError,
    declared_terms,
    member_terms,
    merge_terms,
    upper_to_camel_case,
)


class Availability(Enum):
    IN_STOCK = 1
    PRE_ORDER = 2
    DISCONTINUED = 3


def _no_labels(value):
    return None


# ═══════════════════════════════════════════════════════════════════
# upper_to_camel_case
# ═══════════════════════════════════════════════════════════════════


class TestUpperToCamelCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("PRE_ORDER", "PreOrder"),
            ("IN_STOCK", "InStock"),
            ("DISCONTINUED", "Discontinued"),
            ("already_lower", "AlreadyLower"),
            ("X", "X"),
        ],
    )
    def test_conversion(self, name, expected):
        assert upper_to_camel_case(name) == expected

    def test_repeated_underscores_collapse(self):
        assert upper_to_camel_case("OUT__OF_STOCK") == "OutOfStock"


# ═══════════════════════════════════════════════════════════════════
# declared_terms
# ═══════════════════════════════════════════════════════════════════


class TestDeclaredTerms:
    def test_nothing_declared(self):
        assert declared_terms(None, None, "shop") == {}

    def test_single_term(self):
        assert declared_terms(Term("gr", "http://purl.org/goodrelations/v1#"), None, "shop") == {
            "gr": "http://purl.org/goodrelations/v1#",
        }

    def test_multiple_terms_keep_order(self):
        terms = [Term("b", "B"), Term("a", "A"), Term("c", "C")]
        assert list(declared_terms(None, terms, "shop")) == ["b", "a", "c"]

    def test_empty_terms_sequence(self):
        assert declared_terms(None, [], "shop") == {}

    def test_term_and_terms_conflict(self):
        with pytest.raises(TermDefinitionError, match="both term and terms") as exc:
            declared_terms(Term("a", "A"), [Term("b", "B")], "shop.Product")
        assert exc.value.scope == "shop.Product"

    def test_term_and_empty_terms_still_conflict(self):
        with pytest.raises(TermDefinitionError):
            declared_terms(Term("a", "A"), [], "shop")

    def test_duplicate_define_in_one_scope(self):
        with pytest.raises(TermDefinitionError, match="duplicate definition of term 'a'"):
            declared_terms(None, [Term("a", "A"), Term("a", "B")], "shop")

    def test_same_value_different_keys_allowed(self):
        out = declared_terms(None, [Term("a", "X"), Term("b", "X")], "shop")
        assert out == {"a": "X", "b": "X"}

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            declared_terms(None, [Term("a", "A"), Term("a", "A")], "shop")


# ═══════════════════════════════════════════════════════════════════
# member_terms
# ═══════════════════════════════════════════════════════════════════


class TestMemberTerms:
    def test_enum_without_labels(self):
        out = member_terms([(Member("availability"), Availability.PRE_ORDER)], _no_labels)
        assert out == {
            "availability": EnumTerm(None),
            "PRE_ORDER": "PreOrder",
        }

    def test_enum_constant_label(self):
        labels = {Availability.PRE_ORDER: "po"}
        out = member_terms([(Member("availability"), Availability.PRE_ORDER)], labels.get)
        assert out["PRE_ORDER"] == "po"

    def test_enum_member_expose_becomes_id(self):
        member = Member("availability", expose="http://schema.org/availability")
        out = member_terms([(member, Availability.IN_STOCK)], _no_labels)
        assert out["availability"].to_json() == {
            "@id": "http://schema.org/availability",
            "@type": "@vocab",
        }

    def test_enum_term_without_id(self):
        assert EnumTerm().to_json() == {"@type": "@vocab"}

    def test_none_contributes_nothing(self):
        out = member_terms(
            [(Member("availability"), None), (Member("sku", expose="http://schema.org/sku"), None)],
            _no_labels,
        )
        assert out == {}

    def test_exposed_plain_member(self):
        out = member_terms([(Member("productID", expose="http://schema.org/productID"), "p-1")], _no_labels)
        assert out == {"productID": "http://schema.org/productID"}

    def test_unexposed_plain_member(self):
        assert member_terms([(Member("name"), "Widget")], _no_labels) == {}

    def test_string_enum_is_treated_as_enum(self):
        class Color(str, Enum):
            DARK_RED = "dr"

        out = member_terms([(Member("color"), Color.DARK_RED)], _no_labels)
        assert out["DARK_RED"] == "DarkRed"

    def test_later_member_overwrites_earlier_member(self):
        out = member_terms(
            [
                (Member("a", expose="first"), 1),
                (Member("a", expose="second"), 2),
            ],
            _no_labels,
        )
        assert out == {"a": "second"}


# ═══════════════════════════════════════════════════════════════════
# merge_terms — precedence with a conflicting key at every level
# ═══════════════════════════════════════════════════════════════════


class TestMergePrecedence:
    def test_mixin_wins_over_all(self):
        merged = merge_terms({"k": "package"}, {"k": "type"}, {"k": "mixin"}, {"k": "member"})
        assert merged["k"] == "mixin"

    def test_type_wins_over_package_and_member(self):
        merged = merge_terms({"k": "package"}, {"k": "type"}, {}, {"k": "member"})
        assert merged["k"] == "type"

    def test_package_wins_over_member(self):
        merged = merge_terms({"k": "package"}, {}, {}, {"k": "member"})
        assert merged["k"] == "package"

    def test_member_fills_gaps(self):
        merged = merge_terms({}, {}, {}, {"k": "member"})
        assert merged["k"] == "member"

    def test_insertion_order(self):
        merged = merge_terms({"p": "1"}, {"t": "2"}, {"m": "3"}, {"x": "4", "p": "5"})
        assert list(merged) == ["p", "t", "m", "x"]

    def test_inputs_not_mutated(self):
        package = {"k": "package"}
        merge_terms(package, {"k": "type"}, {}, {})
        assert package == {"k": "package"}
