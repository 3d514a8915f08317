"""
Value resolvers for formatwith.

Implements the resolution strategies a template can be filled from:
- Mapping: direct key lookup in a dict-like object
- Attribute: reflective lookup on an arbitrary object, dotted paths allowed
- Callable: a user function mapping a key to a value
- Chain: the first of several resolvers that knows the key
"""

from collections.abc import Callable, Mapping
from typing import Any, Self
from formatwith.lib.log import LOG
from formatwith.models.dataModel import Resolution


class MappingResolver:
    """Resolver for keys of a mapping."""

    def __init__(self: Self, mapping: Mapping[str, Any]) -> None:
        self.mapping: Mapping[str, Any] = mapping

    def resolve(self: Self, key: str) -> Resolution:
        if key in self.mapping:
            return Resolution.hit(self.mapping[key])
        return Resolution.miss()


class AttributeResolver:
    """Resolver for attributes of an object.

    Dotted keys walk nested attributes, so `{person.name}` resolves
    `obj.person.name`. Any segment starting with an underscore is a miss.
    """

    def __init__(self: Self, obj: Any) -> None:
        self.obj: Any = obj

    def resolve(self: Self, key: str) -> Resolution:
        """Resolve an attribute path on the wrapped object.

        Args:
            key: Attribute name or dotted attribute path

        Returns:
            Resolution with the attribute value, or a miss
        """
        value: Any = self.obj
        for name in key.split("."):
            if not name or name.startswith("_"):
                return Resolution.miss()
            try:
                value = getattr(value, name)
            except AttributeError:
                return Resolution.miss()
        return Resolution.hit(value)


class CallableResolver:
    """Resolver delegating to a function; raising KeyError means a miss."""

    def __init__(self: Self, func: Callable[[str], Any]) -> None:
        self.func: Callable[[str], Any] = func

    def resolve(self: Self, key: str) -> Resolution:
        try:
            return Resolution.hit(self.func(key))
        except KeyError:
            return Resolution.miss()


class ChainResolver:
    """Resolver trying several resolvers in order."""

    def __init__(self: Self, *resolvers: Any) -> None:
        """Initialize the chain.

        Args:
            resolvers: ValueResolvers, or sources accepted by resolver_for
        """
        from formatwith.lib.parser.base import resolver_for

        self.resolvers: list[Any] = [resolver_for(r) for r in resolvers]

    def resolve(self: Self, key: str) -> Resolution:
        for resolver in self.resolvers:
            result: Resolution = resolver.resolve(key)
            if result.found:
                return result
        LOG(f"No resolver in chain of {len(self.resolvers)} found key: {key}")
        return Resolution.miss()
