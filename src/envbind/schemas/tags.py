"""
Declaration grammar parser.

A declaration is a short string attached to a field, for example::

    "optional,default='8080',values='8000,8080,9000'"

It holds two kinds of clauses:

- presence flags ``required`` / ``optional`` (whole tokens, any case)
- keyed clauses ``default='...'``, ``separator='.'``, ``name='...'`` and
  ``values='a,b,c'``

Clauses are found by pattern, not by splitting on commas, so their order and
any surrounding text do not matter. A keyed clause whose value is not wrapped
in single quotes is treated as absent. Repeating a keyed clause is an
authoring error.
"""

import re
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..coercers.sequence import DEFAULT_SEPARATOR
from ..errors import ConflictingFlagsError, DuplicateClauseError

CLAUSE_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "default": re.compile(r"(?<!\w)default='(.*?)'"),
    "separator": re.compile(r"(?<!\w)separator='(.)'"),
    "name": re.compile(r"(?<!\w)name='(.*?)'"),
    "values": re.compile(r"(?<!\w)values='(.*?)'"),
}

_OPTIONAL_FLAG = re.compile(r"\boptional\b", re.IGNORECASE)
_REQUIRED_FLAG = re.compile(r"\brequired\b", re.IGNORECASE)


class TagOptions(BaseModel):
    """Structured options extracted from one declaration string."""

    model_config = ConfigDict(frozen=True)

    optional: bool = False
    required: bool = False
    default: Optional[str] = Field(None, description="Raw default; None when no default clause")
    separator: str = DEFAULT_SEPARATOR
    name: Optional[str] = Field(None, description="Custom environment variable name")
    values: Optional[Tuple[str, ...]] = Field(None, description="Allowed raw values")

    @property
    def has_default(self) -> bool:
        return self.default is not None


def _find_clause(tag: str, key: str) -> Tuple[Optional[str], List[Tuple[int, int]]]:
    matches = list(CLAUSE_PATTERNS[key].finditer(tag))
    if len(matches) > 1:
        raise DuplicateClauseError(f"Too many {key} clauses in tag: {tag!r}")
    if not matches:
        return None, []
    return matches[0].group(1), [matches[0].span()]


def _strip_spans(tag: str, spans: List[Tuple[int, int]]) -> str:
    remainder = []
    position = 0
    for start, end in sorted(spans):
        remainder.append(tag[position:start])
        position = max(position, end)
    remainder.append(tag[position:])
    return " ".join(remainder)


def split_values(values: str) -> Tuple[str, ...]:
    """Split a values clause on commas, trimming whitespace around each element."""
    return tuple(value.strip() for value in values.split(","))


def parse_tag(tag: str) -> TagOptions:
    """
    Parse a declaration string into TagOptions.

    Args:
        tag: The declaration attached to a field (may be empty)

    Returns:
        Parsed options

    Raises:
        DuplicateClauseError: If a keyed clause appears more than once
        ConflictingFlagsError: If both required and optional are present
    """
    clauses: Dict[str, Optional[str]] = {}
    spans: List[Tuple[int, int]] = []
    for key in CLAUSE_PATTERNS:
        clauses[key], found = _find_clause(tag, key)
        spans.extend(found)

    # Flags are looked up outside of clause values, e.g. default='optional'
    flags_text = _strip_spans(tag, spans)
    optional = bool(_OPTIONAL_FLAG.search(flags_text))
    required = bool(_REQUIRED_FLAG.search(flags_text))
    if optional and required:
        raise ConflictingFlagsError(f"Tag cannot be both required and optional: {tag!r}")

    values = clauses["values"]
    return TagOptions(
        optional=optional,
        required=required,
        default=clauses["default"],
        separator=clauses["separator"] or DEFAULT_SEPARATOR,
        name=clauses["name"],
        values=split_values(values) if values is not None else None,
    )
