"""Shared fixtures for the jsonld-vocab tests."""

import pytest

from jsonld_vocab import JsonLdSerializer, VocabRegistry


def in_module(module_name):
    """Class decorator pretending *cls* was defined in *module_name*."""

    def decorator(cls):
        cls.__module__ = module_name
        return cls

    return decorator


@pytest.fixture
def registry():
    return VocabRegistry()


@pytest.fixture
def serialize(registry):
    def _serialize(value, **options):
        return JsonLdSerializer(registry, **options).to_jsonld(value)

    return _serialize
