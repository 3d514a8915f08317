"""Tests for value resolvers."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock
import pytest
from formatwith.lib.parser.base import ValueResolver, fill, resolver_for
from formatwith.lib.parser.resolvers import (
    AttributeResolver,
    CallableResolver,
    ChainResolver,
    MappingResolver,
)
from formatwith.models.dataModel import Resolution


class Person:
    def __init__(self, name: str):
        self.name = name
        self._secret = "hidden"

    @property
    def initials(self) -> str:
        return self.name[0]


def test_mapping_resolver():
    resolver = MappingResolver({"a": 1, "none": None})
    assert resolver.resolve("a") == Resolution(found=True, value=1)
    assert resolver.resolve("none").found
    assert resolver.resolve("none").value is None
    assert not resolver.resolve("b").found


def test_attribute_resolver():
    resolver = AttributeResolver(Person("Ada"))
    assert resolver.resolve("name").value == "Ada"
    assert resolver.resolve("initials").value == "A"
    assert not resolver.resolve("age").found


def test_attribute_resolver_dotted_path():
    resolver = AttributeResolver(SimpleNamespace(owner=Person("Grace")))
    assert resolver.resolve("owner.name").value == "Grace"
    assert not resolver.resolve("owner.age").found
    assert not resolver.resolve("owner.").found


@pytest.mark.parametrize("key", ["_secret", "__class__", "name.__class__"])
def test_attribute_resolver_private_names_miss(key):
    assert not AttributeResolver(Person("Ada")).resolve(key).found


def test_callable_resolver():
    lookup = {"x": 42}
    resolver = CallableResolver(lambda key: lookup[key])
    assert resolver.resolve("x").value == 42
    assert not resolver.resolve("y").found


def test_callable_resolver_propagates_other_errors():
    def broken(key: str) -> str:
        raise RuntimeError("backend down")

    with pytest.raises(RuntimeError, match="backend down"):
        CallableResolver(broken).resolve("x")


def test_chain_resolver_first_hit_wins():
    resolver = ChainResolver({"a": "map"}, Person("Ada"), {"a": "later", "b": 2})
    assert resolver.resolve("a").value == "map"
    assert resolver.resolve("name").value == "Ada"
    assert resolver.resolve("b").value == 2
    assert not resolver.resolve("zzz").found


def test_resolver_for_dispatch():
    custom = MappingResolver({})
    assert resolver_for(custom) is custom
    assert isinstance(resolver_for({"a": 1}), MappingResolver)
    assert isinstance(resolver_for(lambda key: key), CallableResolver)
    assert isinstance(resolver_for(Person("Ada")), AttributeResolver)


def test_resolvers_satisfy_protocol():
    for resolver in (
        MappingResolver({}),
        AttributeResolver(object()),
        CallableResolver(str),
        ChainResolver(),
    ):
        assert isinstance(resolver, ValueResolver)


def test_custom_resolver_object_is_used_directly():
    resolver = Mock(spec=ValueResolver)
    resolver.resolve.return_value = Resolution.hit("v")
    assert resolver_for(resolver) is resolver


def test_declared_resolver_subclass_is_used_directly():
    class UpperResolver(ValueResolver):
        def resolve(self, key: str) -> Resolution:
            return Resolution.hit(key.upper())

    resolver = UpperResolver()
    assert resolver_for(resolver) is resolver
    assert fill("{ab}", resolver) == "AB"


class Config:
    name = "Ada"


class Document:
    title = "Notes"

    def resolve(self) -> str:
        return "/tmp/notes"


def test_class_source_is_read_not_called():
    assert isinstance(resolver_for(Config), AttributeResolver)
    assert fill("{name}", Config) == "Ada"


def test_object_with_unrelated_resolve_method():
    assert isinstance(resolver_for(Document()), AttributeResolver)
    assert fill("{title}", Document()) == "Notes"


def test_path_source_uses_attribute_lookup():
    path = Path("/srv/report.txt")
    assert isinstance(resolver_for(path), AttributeResolver)
    assert fill("{name}|{suffix}", path) == "report.txt|.txt"


def test_chain_resolver_wraps_class_sources():
    resolver = ChainResolver({"a": 1}, Config)
    assert resolver.resolve("name").value == "Ada"
