"""
Field resolver and validator.

Walks every field of a configuration schema exactly once, resolving each to
one of three terminal outcomes:

- MISSING: required field with no environment value
- INVALID: value present but rejected by allowed values or coercion
- VALID: coerced value (or the zero value for an empty optional field)

Problems never short-circuit the pass, so a single report lists every
missing and invalid field at once.
"""

import logging
from typing import Any, Mapping, Optional

from .schemas.field_schema import FieldSchema, build_schema, resolve_model_class
from .schemas.outcomes import FieldOutcome, OutcomeStatus, ValidationReport

logger = logging.getLogger(__name__)


class FieldValidator:
    """
    Resolve configuration fields against one environment snapshot.

    The validator holds no state beyond the environment it was given, so a
    separate instance (or the same one) can be used from any thread.
    """

    def __init__(self, environ: Mapping[str, str]):
        """
        Initialize the validator.

        Args:
            environ: Environment lookup; absent keys behave like empty values
        """
        self.environ = environ

    def lookup(self, env_name: str) -> str:
        """Return the raw value for env_name, or an empty string."""
        return self.environ.get(env_name) or ""

    def resolve_field(self, field: FieldSchema) -> FieldOutcome:
        """
        Resolve one field to its outcome.

        Args:
            field: Schema of the field to resolve

        Returns:
            The field's terminal outcome
        """
        raw = self.lookup(field.env_name)

        if raw == "":
            if field.required:
                logger.debug(f"Field {field.label} is missing")
                return self._outcome(field, OutcomeStatus.MISSING)

            if not field.has_default:
                logger.debug(f"Field {field.label} is empty, using zero value")
                return self._outcome(
                    field, OutcomeStatus.VALID, value=field.zero_value(), kind=self._kind(field)
                )

            logger.debug(f"Field {field.label} is empty, using default")
            raw = field.default

        try:
            value = field.convert(raw)
        except ValueError as e:
            logger.debug(f"Field {field.label} is invalid: {e}")
            return self._outcome(field, OutcomeStatus.INVALID, raw=raw, reason=str(e))

        logger.debug(f"Field {field.label} is valid")
        return self._outcome(field, OutcomeStatus.VALID, raw=raw, value=value, kind=self._kind(field))

    def validate(self, model: Any) -> ValidationReport:
        """
        Validate every field of a configuration model.

        Args:
            model: Pydantic model class or instance

        Returns:
            Report holding one outcome per field, in declaration order

        Raises:
            SchemaError: If the model's declarations are defective
        """
        model_cls = resolve_model_class(model)
        schema = build_schema(model_cls)

        report = ValidationReport(
            model_name=model_cls.__name__,
            outcomes=tuple(self.resolve_field(field) for field in schema),
        )

        if not report.is_valid:
            logger.warning(
                f"Configuration {report.model_name} failed validation: "
                f"missing={report.missing} invalid={[item.label for item in report.invalid]}"
            )
        return report

    @staticmethod
    def _kind(field: FieldSchema) -> str:
        return f"list[{field.kind}]" if field.is_sequence else field.kind

    @staticmethod
    def _outcome(
        field: FieldSchema,
        status: OutcomeStatus,
        raw: Optional[str] = None,
        value: Any = None,
        kind: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> FieldOutcome:
        return FieldOutcome(
            name=field.name,
            env_name=field.env_name,
            status=status,
            raw=raw,
            value=value,
            kind=kind,
            reason=reason,
        )


def validate(model: Any, environ: Mapping[str, str]) -> ValidationReport:
    """Validate model against environ in a single pass."""
    return FieldValidator(environ).validate(model)
