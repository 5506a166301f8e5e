"""
Base interfaces for scalar coercers.
"""

from typing import Any, Protocol


class Coercer(Protocol):
    """
    Protocol every registered coercer satisfies.

    A coercer receives the raw environment text and either returns the
    typed value or raises CoercionError (any ValueError is accepted).
    """

    def __call__(self, raw: str) -> Any:
        ...
