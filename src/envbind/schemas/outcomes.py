"""
Per-field validation outcomes and the report of one validation pass.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..errors import EnvValidationError, InvalidField


class OutcomeStatus(str, Enum):
    """Terminal state of a field after validation."""
    MISSING = "missing"
    INVALID = "invalid"
    VALID = "valid"


class FieldOutcome(BaseModel):
    """
    Result of resolving a single field against the environment.

    Valid outcomes carry the coerced value and its kind; invalid outcomes
    carry the offending raw text and the coercer's reason.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Declared field identifier")
    env_name: str = Field(..., description="Resolved environment variable name")
    status: OutcomeStatus
    raw: Optional[str] = Field(None, description="Raw text that was validated")
    value: Any = None
    kind: Optional[str] = Field(None, description="Coerced kind, 'list[kind]' for sequences")
    reason: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.env_name})"

    @property
    def is_valid(self) -> bool:
        return self.status == OutcomeStatus.VALID


class ValidationReport(BaseModel):
    """
    Outcome of validating every field of one configuration model.

    The report is built fresh for each pass and owns its values; nothing is
    shared between passes.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    model_name: str
    outcomes: Tuple[FieldOutcome, ...] = ()

    @property
    def missing(self) -> List[str]:
        """Labels of required fields with no value, in schema order."""
        return [o.label for o in self.outcomes if o.status == OutcomeStatus.MISSING]

    @property
    def invalid(self) -> List[InvalidField]:
        """Fields whose value failed allowed-values or coercion checks."""
        return [
            InvalidField(label=o.label, value=o.raw or "", reason=o.reason)
            for o in self.outcomes
            if o.status == OutcomeStatus.INVALID
        ]

    @property
    def is_valid(self) -> bool:
        return all(o.is_valid for o in self.outcomes)

    def values(self) -> Dict[str, Any]:
        """Coerced values of the valid fields keyed by declared identifier."""
        return {o.name: o.value for o in self.outcomes if o.is_valid}

    def get(self, name: str) -> Optional[FieldOutcome]:
        """Return the outcome for a declared field identifier."""
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None

    def to_error(self) -> Optional[EnvValidationError]:
        """Aggregate missing and invalid fields into one error, or None if valid."""
        if self.is_valid:
            return None
        return EnvValidationError(self.missing, self.invalid)

    def raise_for_errors(self) -> None:
        """
        Raise the aggregated error if any field is missing or invalid.

        Raises:
            EnvValidationError: If the pass found any problem
        """
        error = self.to_error()
        if error is not None:
            raise error
