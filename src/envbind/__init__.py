"""
envbind - bind environment variables to declared configuration models.

Fields of a pydantic model are annotated with a short declaration; envbind
resolves each field's environment variable, applies defaults and allowed
values, coerces the raw text and returns a populated model, or one error
that lists every missing and invalid variable.

Modules:
    api: validate / load / must_load entry points
    schemas: Declaration grammar, field schema and validation outcomes
    coercers: Pluggable per-kind coercers and sequence splitting
    validator: Single-pass field resolution
    binder: Model assembly from validated values
    environment: Host environment snapshot with dotenv support
    config: envbind's own settings
"""

from .api import load, must_load, validate
from .coercers import coerce, get_coercer, list_kinds, register_coercer, unregister_coercer
from .errors import (
    CoercionError,
    ConflictingFlagsError,
    DuplicateClauseError,
    DuplicateKindError,
    EnvValidationError,
    InvalidDefaultError,
    InvalidField,
    NotARecordError,
    SchemaError,
    UnknownKindError,
)
from .environment import load_environment
from .schemas import Env, FieldSchema, ValidationReport, build_schema
from .types import HTTPURL, IPv4, URL

__version__ = "0.1.0"

__all__ = [
    "load",
    "must_load",
    "validate",
    "coerce",
    "get_coercer",
    "list_kinds",
    "register_coercer",
    "unregister_coercer",
    "CoercionError",
    "ConflictingFlagsError",
    "DuplicateClauseError",
    "DuplicateKindError",
    "EnvValidationError",
    "InvalidDefaultError",
    "InvalidField",
    "NotARecordError",
    "SchemaError",
    "UnknownKindError",
    "load_environment",
    "Env",
    "FieldSchema",
    "ValidationReport",
    "build_schema",
    "HTTPURL",
    "IPv4",
    "URL",
]
