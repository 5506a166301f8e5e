"""
Reference scalar coercers: string, bool, int and IPv4.

URL coercers live in ``envbind.coercers.url``.
"""

import ipaddress
import re

from ..errors import CoercionError

TRUE_LITERALS = ("true", "yes", "1")
FALSE_LITERALS = ("false", "no", "0")

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_string(raw: str) -> str:
    """Identity coercion; every string, including the empty one, is valid."""
    return raw


def parse_bool(raw: str) -> bool:
    """
    Parse one of the exact literals true/false, yes/no, 1/0.

    Matching is case-sensitive and nothing is trimmed, so "True" and
    " true" are both rejected.
    """
    if raw in TRUE_LITERALS:
        return True
    if raw in FALSE_LITERALS:
        return False
    raise CoercionError(f"invalid boolean value: {raw}")


def parse_int(raw: str) -> int:
    """
    Parse a base-10 integer with an optional sign.

    Leading zeros are read as decimal. Values outside the signed 64-bit
    range are rejected.
    """
    if not _INT_PATTERN.fullmatch(raw):
        raise CoercionError(f"invalid integer value: {raw}")

    value = int(raw, 10)
    if value < INT_MIN or value > INT_MAX:
        raise CoercionError(f"integer out of range: {raw}")
    return value


def parse_ipv4(raw: str) -> str:
    """Accept a dotted-quad IPv4 address and return it unchanged."""
    try:
        address = ipaddress.ip_address(raw)
    except ValueError as e:
        raise CoercionError(f"invalid IPv4 address: {raw}") from e

    if address.version != 4:
        raise CoercionError(f"invalid IPv4 address: {raw}")
    return raw
