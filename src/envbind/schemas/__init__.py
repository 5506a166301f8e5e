"""
Schema definitions for configuration models.

Modules:
    tags: Declaration grammar parser
    field_schema: Per-field schema derived from a pydantic model
    outcomes: Per-field outcomes and the validation report
"""

from .field_schema import (
    Env,
    FieldSchema,
    build_schema,
    clear_schema_cache,
    kind_of,
    resolve_model_class,
)
from .outcomes import FieldOutcome, OutcomeStatus, ValidationReport
from .tags import TagOptions, parse_tag

__all__ = [
    "Env",
    "FieldSchema",
    "build_schema",
    "clear_schema_cache",
    "kind_of",
    "resolve_model_class",
    "FieldOutcome",
    "OutcomeStatus",
    "ValidationReport",
    "TagOptions",
    "parse_tag",
]
