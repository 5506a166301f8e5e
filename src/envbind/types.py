"""
Named string types for configuration fields.

Declaring a field as IPv4, URL or HTTPURL selects the matching coercer
while the bound value stays a plain ``str`` subclass.
"""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class NamedString(str):
    """Base class for string types that select their own coercer kind."""

    __envbind_kind__ = "string"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())


class IPv4(NamedString):
    """Dotted-quad IPv4 address."""

    __envbind_kind__ = "ipv4"


class URL(NamedString):
    """Request-target URL with any (or no) scheme."""

    __envbind_kind__ = "url"


class HTTPURL(NamedString):
    """Request-target URL restricted to the http and https schemes."""

    __envbind_kind__ = "httpurl"
