"""
Coercers turning raw environment text into typed values.

Modules:
    registry: Kind identifier to coercer mapping
    scalars: string, bool, int and IPv4 coercers
    url: URL and HTTP URL coercers
    sequence: Separator-based list coercion
"""

from .registry import (
    COERCER_REGISTRY,
    coerce,
    get_coercer,
    list_kinds,
    register_coercer,
    unregister_coercer,
)
from .sequence import DEFAULT_SEPARATOR, coerce_sequence

__all__ = [
    "COERCER_REGISTRY",
    "coerce",
    "get_coercer",
    "list_kinds",
    "register_coercer",
    "unregister_coercer",
    "DEFAULT_SEPARATOR",
    "coerce_sequence",
]
