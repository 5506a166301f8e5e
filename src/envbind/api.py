"""
Public entry points: validate, load and must_load.

Each call snapshots the environment (unless one is passed in), validates
every field in one pass and, for load/must_load, returns a fully populated
model instance. Nothing is cached between calls apart from the immutable
per-model schema.
"""

import logging
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from .binder import bind
from .environment import load_environment
from .errors import EnvValidationError
from .schemas.outcomes import ValidationReport
from .validator import FieldValidator

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


def validate(model: Any, environ: Optional[Mapping[str, str]] = None) -> ValidationReport:
    """
    Validate a configuration model without binding it.

    Args:
        model: Pydantic model class or instance
        environ: Environment lookup; the host environment when omitted

    Returns:
        Report listing every field's outcome
    """
    if environ is None:
        environ = load_environment()
    return FieldValidator(environ).validate(model)


def load(
    model: Union[Type[ModelType], ModelType],
    environ: Optional[Mapping[str, str]] = None,
) -> ModelType:
    """
    Validate and bind a configuration model.

    Args:
        model: Pydantic model class or instance
        environ: Environment lookup; the host environment when omitted

    Returns:
        Fully populated model instance

    Raises:
        EnvValidationError: If any field is missing or invalid
        SchemaError: If the model's declarations are defective
    """
    report = validate(model, environ)
    return bind(model, report)


def must_load(
    model: Union[Type[ModelType], ModelType],
    environ: Optional[Mapping[str, str]] = None,
) -> ModelType:
    """
    Like load(), but stop the program when the environment is not valid.

    Raises:
        SystemExit: If any field is missing or invalid
    """
    try:
        return load(model, environ)
    except EnvValidationError as e:
        logger.error(f"Configuration error: {e}")
        raise SystemExit(f"Configuration error: {e}") from e
