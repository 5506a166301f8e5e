"""
Binder: assemble a configuration model instance from validated outcomes.
"""

import logging
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel, ValidationError

from .errors import EnvValidationError, InvalidField, SchemaError
from .schemas.field_schema import FieldSchema, build_schema, resolve_model_class
from .schemas.outcomes import ValidationReport

logger = logging.getLogger(__name__)


def to_declared_type(value: Any, target: Any) -> Any:
    """
    Convert a coerced value to the field's declared element type.

    Coercers return generic values (str, int, ...); named types such as
    IPv4 or an ``int`` subclass are built from them here.
    """
    if value is None or not isinstance(target, type) or isinstance(value, target):
        return value
    try:
        return target(value)
    except (TypeError, ValueError) as e:
        raise SchemaError(
            f"Coerced value of type {type(value).__name__} cannot be converted to {target.__name__}"
        ) from e


def _field_value(field: FieldSchema, value: Any) -> Any:
    if field.is_sequence and value is not None:
        return [to_declared_type(item, field.element_type) for item in value]
    return to_declared_type(value, field.element_type)


def _fold_validation_error(
    error: ValidationError,
    schema: Tuple[FieldSchema, ...],
    report: ValidationReport,
) -> EnvValidationError:
    by_key = {field.bind_key: field for field in schema}
    invalid: List[InvalidField] = []
    seen = set()

    for detail in error.errors():
        loc = detail.get("loc") or ()
        field = by_key.get(loc[0]) if loc else None
        if field is not None:
            outcome = report.get(field.name)
            label = field.label
            raw = outcome.raw if outcome is not None and outcome.raw is not None else ""
        else:
            label, raw = report.model_name, ""

        if label in seen:
            continue
        seen.add(label)
        invalid.append(InvalidField(label=label, value=raw, reason=detail.get("msg")))

    return EnvValidationError([], invalid)


def bind(model: Any, report: ValidationReport) -> BaseModel:
    """
    Build a populated model instance from a validation report.

    Args:
        model: Pydantic model class or instance the report was produced for
        report: Report of the validation pass

    Returns:
        Fully populated model instance

    Raises:
        EnvValidationError: If the report holds missing or invalid fields, or
            a validator declared on the model rejects a value
    """
    report.raise_for_errors()

    model_cls: Type[BaseModel] = resolve_model_class(model)
    schema = build_schema(model_cls)

    data: Dict[str, Any] = {}
    for field in schema:
        outcome = report.get(field.name)
        if outcome is None:
            raise SchemaError(f"Report has no outcome for field {field.label}")
        data[field.bind_key] = _field_value(field, outcome.value)

    try:
        instance = model_cls.model_validate(data)
    except ValidationError as e:
        folded = _fold_validation_error(e, schema, report)
        logger.warning(f"Configuration {report.model_name} rejected by model validators: {folded.invalid_labels}")
        raise folded from e

    logger.info(f"Loaded configuration {model_cls.__name__} with {len(schema)} fields")
    return instance
