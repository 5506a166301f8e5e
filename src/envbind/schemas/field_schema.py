"""
Field schema derivation for configuration models.

Configuration models are pydantic models whose fields carry an ``Env``
declaration through ``typing.Annotated``::

    class ServerConfig(BaseModel):
        host: Annotated[str, Env("required,name='DATABASE_URL'")]
        port: Annotated[int, Env("optional,default='8080'")]
        peers: Annotated[list[IPv4], Env("optional,separator=','")]

build_schema() walks the model once and produces an immutable tuple of
FieldSchema objects, one per field, which the validator then works from.
"""

import logging
import types
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from ..coercers.registry import get_coercer, normalize_kind
from ..coercers.sequence import DEFAULT_SEPARATOR, coerce_sequence
from ..errors import (
    CoercionError,
    InvalidDefaultError,
    NotARecordError,
    SchemaError,
    UnknownKindError,
)
from .tags import TagOptions, parse_tag

logger = logging.getLogger(__name__)

# Python type names that differ from their kind identifier
KIND_ALIASES = {"str": "string"}


@dataclass(frozen=True)
class Env:
    """Declaration marker attached to a model field with typing.Annotated."""

    tag: str = ""


class FieldSchema(BaseModel):
    """
    Everything the validator needs to know about one configuration field.

    Features:
    - Resolved environment variable name
    - Presence rules (optional, default)
    - Allowed raw values
    - Coercion kind and sequence separator
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Declared field identifier")
    env_name: str = Field(..., description="Environment variable looked up for this field")
    alias: Optional[str] = Field(None, description="Pydantic alias used when binding")
    optional: bool = False
    default: Optional[str] = None
    allowed_values: Optional[Tuple[str, ...]] = None
    separator: str = DEFAULT_SEPARATOR
    kind: str
    is_sequence: bool = False
    nullable: bool = False
    element_type: Any = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def required(self) -> bool:
        return not self.optional

    @property
    def label(self) -> str:
        """Human-readable label used in error reports."""
        return f"{self.name} ({self.env_name})"

    @property
    def bind_key(self) -> str:
        return self.alias or self.name

    def convert(self, raw: str) -> Any:
        """
        Check raw against the allowed values, then coerce it.

        Raises:
            CoercionError: If raw is not allowed or cannot be coerced
        """
        if self.allowed_values is not None and raw not in self.allowed_values:
            raise CoercionError(
                f"value is not one of the allowed values {list(self.allowed_values)}"
            )

        if self.is_sequence:
            return coerce_sequence(raw, self.kind, self.separator)
        return get_coercer(self.kind)(raw)

    def zero_value(self) -> Any:
        """Value bound to an optional field that has no environment value and no default."""
        if self.nullable:
            return None
        if self.is_sequence:
            return []
        return self.element_type()


def kind_of(element_type: Any) -> str:
    """
    Derive the coercer kind for a field's element type.

    Types may name their kind with ``__envbind_kind__``; otherwise the
    lower-cased class name is used.
    """
    kind = getattr(element_type, "__envbind_kind__", None)
    if kind:
        return normalize_kind(kind)

    name = getattr(element_type, "__name__", None)
    if not name:
        raise UnknownKindError(f"Cannot derive a kind from type {element_type!r}")
    name = name.lower()
    return KIND_ALIASES.get(name, name)


def unwrap_annotation(annotation: Any) -> Tuple[Any, bool, bool]:
    """
    Split a field annotation into (element_type, is_sequence, nullable).

    Supports ``X``, ``Optional[X]`` / ``X | None``, ``list[X]`` and
    ``Optional[list[X]]``.
    """
    nullable = False
    origin = get_origin(annotation)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1 or len(members) == len(get_args(annotation)):
            raise SchemaError(f"Unsupported union type {annotation!r}")
        nullable = True
        annotation = members[0]
        origin = get_origin(annotation)

    if origin is list:
        args = get_args(annotation)
        if len(args) != 1:
            raise SchemaError(f"Sequence type {annotation!r} must declare one element type")
        return args[0], True, nullable

    if origin is not None:
        raise SchemaError(f"Unsupported field type {annotation!r}")

    return annotation, False, nullable


def _declaration(name: str, info: FieldInfo) -> str:
    markers = [item for item in info.metadata if isinstance(item, Env)]
    if len(markers) > 1:
        raise SchemaError(f"Field '{name}' has more than one Env declaration")
    return markers[0].tag if markers else ""


def _bind_alias(name: str, info: FieldInfo) -> Optional[str]:
    """Return the key model_validate accepts for a field, None for its name."""
    alias = info.validation_alias
    if alias is None:
        return info.alias
    if isinstance(alias, str):
        return alias
    if isinstance(alias, AliasChoices):
        for choice in alias.choices:
            if isinstance(choice, str):
                return choice
    raise SchemaError(f"Field '{name}' has a validation alias that cannot be bound: {alias!r}")


def resolve_model_class(model: Any) -> Type[BaseModel]:
    """
    Return the model class for a model class or instance.

    Raises:
        NotARecordError: If model is neither a pydantic model class nor instance
    """
    if isinstance(model, BaseModel):
        return type(model)
    if isinstance(model, type) and issubclass(model, BaseModel):
        return model
    raise NotARecordError(f"Invalid parameter: expected a pydantic model, got {model!r}")


def _verify_default(field: FieldSchema) -> None:
    if not field.optional:
        if field.has_default:
            logger.debug(f"Default for required field {field.label} is never used")
        return

    if field.has_default:
        try:
            field.convert(field.default)
        except ValueError as e:
            raise InvalidDefaultError(
                f"Default {field.default!r} for field {field.label} is invalid: {e}"
            ) from e
        return

    try:
        field.zero_value()
    except (TypeError, ValueError) as e:
        raise SchemaError(
            f"Optional field {field.label} has no default and its type has no zero value"
        ) from e


def build_field_schema(name: str, info: FieldInfo) -> FieldSchema:
    """Build the FieldSchema for one model field."""
    options: TagOptions = parse_tag(_declaration(name, info))
    element_type, is_sequence, nullable = unwrap_annotation(info.annotation)

    kind = kind_of(element_type)
    try:
        get_coercer(kind)
    except UnknownKindError as e:
        raise UnknownKindError(f"Unrecognized type '{kind}' for field '{name}'") from e

    field = FieldSchema(
        name=name,
        env_name=options.name or name.upper(),
        alias=_bind_alias(name, info),
        optional=options.optional,
        default=options.default,
        allowed_values=options.values,
        separator=options.separator,
        kind=kind,
        is_sequence=is_sequence,
        nullable=nullable,
        element_type=element_type,
    )
    _verify_default(field)
    return field


@lru_cache(maxsize=None)
def _build_schema(model_cls: Type[BaseModel]) -> Tuple[FieldSchema, ...]:
    fields = tuple(
        build_field_schema(name, info) for name, info in model_cls.model_fields.items()
    )
    logger.debug(f"Built schema for {model_cls.__name__} with {len(fields)} fields")
    return fields


def build_schema(model: Any) -> Tuple[FieldSchema, ...]:
    """
    Build (or fetch the memoised) schema for a configuration model.

    Args:
        model: Pydantic model class or instance

    Returns:
        One FieldSchema per model field, in declaration order

    Raises:
        SchemaError: On any defect in the model's declarations
    """
    return _build_schema(resolve_model_class(model))


def clear_schema_cache() -> None:
    """Forget memoised schemas, e.g. after re-registering coercers."""
    _build_schema.cache_clear()
