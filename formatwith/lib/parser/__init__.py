"""
Parser package for formatwith template substitution.

Provides the tokenizer, the token parser and the substitution driver, plus
the resolver and formatter strategies they are configured with.
"""

from .base import (
    TemplateParser,
    ValueFormatter,
    ValueResolver,
    fill,
    resolver_for,
    tokens_list,
)
from .formatters import DefaultFormatter, PythonFormatter
from .resolvers import AttributeResolver, CallableResolver, ChainResolver, MappingResolver
from .token_information import TokenInformation
from .tokenizer import Tokenizer, tokenize

__all__ = [
    "TemplateParser",
    "ValueFormatter",
    "ValueResolver",
    "fill",
    "resolver_for",
    "tokens_list",
    "DefaultFormatter",
    "PythonFormatter",
    "AttributeResolver",
    "CallableResolver",
    "ChainResolver",
    "MappingResolver",
    "TokenInformation",
    "Tokenizer",
    "tokenize",
]
