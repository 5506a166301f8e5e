"""
Exception hierarchy for envbind.

There are two families of errors:

- SchemaError and its subclasses describe defects in the configuration
  schema itself (bad declarations, unknown kinds, broken defaults). They
  reproduce on every run and are never collected into a report.
- EnvValidationError aggregates every missing and invalid environment value
  found in one validation pass.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict


class SchemaError(Exception):
    """Base exception for schema-authoring defects."""
    pass


class NotARecordError(SchemaError):
    """Raised when validation is asked to walk something that is not a model."""
    pass


class UnknownKindError(SchemaError):
    """Raised when a field references a kind with no registered coercer."""
    pass


class DuplicateKindError(SchemaError):
    """Raised when a coercer is registered twice for the same kind."""
    pass


class DuplicateClauseError(SchemaError):
    """Raised when a declaration repeats a keyed clause."""
    pass


class ConflictingFlagsError(SchemaError):
    """Raised when a declaration is both required and optional."""
    pass


class InvalidDefaultError(SchemaError):
    """Raised when a declared default does not pass its own field's checks."""
    pass


class CoercionError(ValueError):
    """Raised by coercers when raw text cannot be turned into a typed value."""
    pass


class InvalidField(BaseModel):
    """A field whose environment value was present but rejected."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    reason: Optional[str] = None

    def __str__(self) -> str:
        return self.label


class EnvValidationError(ValueError):
    """
    Every missing and invalid field from a single validation pass.

    Rendering puts missing fields on one line and invalid fields on the
    next, omitting a line when its list is empty:

        Missing: [host (DATABASE_URL)]
        Invalid: [port (PORT)]
    """

    def __init__(self, missing: Sequence[str], invalid: Sequence[InvalidField]):
        self.missing: List[str] = list(missing)
        self.invalid: List[InvalidField] = list(invalid)
        super().__init__(self._render())

    def _render(self) -> str:
        lines = []
        if self.missing:
            lines.append(f"Missing: [{', '.join(self.missing)}]")
        if self.invalid:
            lines.append(f"Invalid: [{', '.join(str(item) for item in self.invalid)}]")
        return "\n".join(lines)

    @property
    def invalid_labels(self) -> List[str]:
        """Labels of the invalid fields, in schema order."""
        return [item.label for item in self.invalid]
