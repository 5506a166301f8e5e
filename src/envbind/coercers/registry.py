"""
Central coercer registry.

Maps case-insensitive kind identifiers to the functions that turn raw
environment text into typed values. The reference kinds are registered at
import time; applications add their own with register_coercer().
"""

import logging
from typing import Any, Dict, List

from ..errors import DuplicateKindError, UnknownKindError
from .base import Coercer
from .scalars import parse_bool, parse_int, parse_ipv4, parse_string
from .url import parse_http_url, parse_url

logger = logging.getLogger(__name__)


# Registry mapping kind identifiers (lower-cased) to coercers
COERCER_REGISTRY: Dict[str, Coercer] = {
    "string": parse_string,
    "bool": parse_bool,
    "int": parse_int,
    "ipv4": parse_ipv4,
    "url": parse_url,
    "httpurl": parse_http_url,
}


def normalize_kind(kind: str) -> str:
    """Return the registry key for a kind identifier."""
    return kind.lower()


def register_coercer(kind: str, coercer: Coercer, *, replace: bool = False) -> None:
    """
    Register a coercer for a new kind.

    Args:
        kind: Kind identifier, matched case-insensitively
        coercer: Callable taking the raw text and returning the typed value
        replace: Allow overriding an existing registration

    Raises:
        DuplicateKindError: If the kind is already registered and replace is False
    """
    key = normalize_kind(kind)
    if key in COERCER_REGISTRY and not replace:
        raise DuplicateKindError(f"Coercer for kind '{key}' is already registered")

    COERCER_REGISTRY[key] = coercer
    logger.debug(f"Registered coercer for kind '{key}'")


def unregister_coercer(kind: str) -> None:
    """
    Remove a registered coercer.

    Raises:
        UnknownKindError: If the kind is not registered
    """
    key = normalize_kind(kind)
    if key not in COERCER_REGISTRY:
        raise UnknownKindError(f"Kind '{key}' is not registered")
    del COERCER_REGISTRY[key]


def get_coercer(kind: str) -> Coercer:
    """
    Get the coercer for a kind.

    Args:
        kind: Kind identifier, matched case-insensitively

    Returns:
        The registered coercer

    Raises:
        UnknownKindError: If no coercer is registered for the kind
    """
    key = normalize_kind(kind)
    if key not in COERCER_REGISTRY:
        raise UnknownKindError(
            f"Unrecognized type '{kind}'. Available kinds: {list_kinds()}"
        )

    return COERCER_REGISTRY[key]


def list_kinds() -> List[str]:
    """Get a list of all registered kind identifiers."""
    return list(COERCER_REGISTRY.keys())


def coerce(kind: str, raw: str) -> Any:
    """Coerce raw text with the coercer registered for kind."""
    return get_coercer(kind)(raw)
