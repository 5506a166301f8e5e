"""
Sequence coercion: split raw text on a separator and coerce each element.
"""

from typing import Any, List

from ..errors import CoercionError
from .registry import get_coercer

DEFAULT_SEPARATOR = " "


def coerce_sequence(raw: str, kind: str, separator: str = DEFAULT_SEPARATOR) -> List[Any]:
    """
    Split raw on every occurrence of separator and coerce each element.

    There is no escaping, so an element can never contain the separator.
    Splitting an empty string yields a single empty element.

    Args:
        raw: Raw environment text
        kind: Kind identifier applied to every element
        separator: Element separator

    Returns:
        List of coerced elements

    Raises:
        CoercionError: If any element fails; no partial list is returned
    """
    coercer = get_coercer(kind)
    values = []
    failures = []

    for index, element in enumerate(raw.split(separator)):
        try:
            values.append(coercer(element))
        except ValueError as e:
            failures.append(f"[{index}] {e}")

    if failures:
        raise CoercionError(f"invalid {kind} sequence: {'; '.join(failures)}")
    return values
