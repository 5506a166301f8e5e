"""
URL and HTTP URL coercers.

Values are parsed as an HTTP request target: either an absolute URI with a
scheme, or an absolute path. A scheme is recognised as the text before the
first colon when it starts with a letter and contains only letters, digits,
"+", "-" and ".". That makes "db:5432" a URI with scheme "db" and an opaque
part, while "example.com" and "example.com/path" have no scheme and no
leading slash and are therefore rejected.
"""

import string
from typing import NamedTuple, Tuple

from ..errors import CoercionError

HTTP_SCHEMES = ("http", "https")

_HEX_DIGITS = set(string.hexdigits)
_ALNUM = set(string.ascii_letters + string.digits)
_SCHEME_CHARS = set(string.digits + "+-.")
_HOST_CHARS = _ALNUM | set("!$&'()*+,;=:[]<>\"-_.~")
_USERINFO_CHARS = _ALNUM | set("-._:~!$&'()*+,;=%@")


class RequestURI(NamedTuple):
    """Components of a parsed request target."""

    scheme: str = ""
    opaque: str = ""
    userinfo: str = ""
    host: str = ""
    path: str = ""
    query: str = ""


def _split_scheme(raw: str) -> Tuple[str, str]:
    for i, c in enumerate(raw):
        if c in string.ascii_letters:
            continue
        if c in _SCHEME_CHARS:
            if i == 0:
                return "", raw
            continue
        if c == ":":
            if i == 0:
                raise CoercionError("missing protocol scheme")
            return raw[:i], raw[i + 1:]
        return "", raw
    return "", raw


def _check_escapes(text: str, host: bool = False, zone: bool = False) -> None:
    i = 0
    while i < len(text):
        c = text[i]
        if c == "%":
            escape = text[i:i + 3]
            if len(escape) < 3 or escape[1] not in _HEX_DIGITS or escape[2] not in _HEX_DIGITS:
                raise CoercionError(f"invalid URL escape {escape!r}")
            # Hosts may only carry escapes of non-ASCII bytes, or "%25".
            if host and int(escape[1], 16) < 8 and escape != "%25":
                raise CoercionError(f"invalid URL escape {escape!r}")
            # Zones may escape a space or any byte allowed in a host.
            if zone and escape != "%25":
                decoded = chr(int(escape[1:], 16))
                if decoded != " " and decoded not in _HOST_CHARS:
                    raise CoercionError(f"invalid URL escape {escape!r}")
            i += 3
            continue
        if (host or zone) and c.isascii() and c not in _HOST_CHARS:
            raise CoercionError(f"invalid character {c!r} in host name")
        i += 1


def _valid_optional_port(port: str) -> bool:
    if port == "":
        return True
    if port[0] != ":":
        return False
    return all(c in string.digits for c in port[1:])


def _parse_host(host: str) -> str:
    if host.startswith("["):
        end = host.rfind("]")
        if end < 0:
            raise CoercionError("missing ']' in host")
        if not _valid_optional_port(host[end + 1:]):
            raise CoercionError(f"invalid port {host[end + 1:]!r} after host")
        # IPv6 zone identifier, e.g. [fe80::1%25en0]
        zone = host.find("%25", 0, end)
        if zone >= 0:
            _check_escapes(host[:zone], host=True)
            _check_escapes(host[zone:end], zone=True)
            _check_escapes(host[end:], host=True)
            return host
    else:
        colon = host.rfind(":")
        if colon != -1 and not _valid_optional_port(host[colon:]):
            raise CoercionError(f"invalid port {host[colon:]!r} after host")

    _check_escapes(host, host=True)
    return host


def _parse_authority(authority: str) -> Tuple[str, str]:
    at = authority.rfind("@")
    if at < 0:
        return "", _parse_host(authority)

    host = _parse_host(authority[at + 1:])
    userinfo = authority[:at]
    if any(c not in _USERINFO_CHARS for c in userinfo):
        raise CoercionError("invalid userinfo")
    _check_escapes(userinfo)
    return userinfo, host


def parse_request_uri(raw: str) -> RequestURI:
    """
    Parse raw text as a request target.

    Raises:
        CoercionError: If the text is not a valid request target.
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in raw):
        raise CoercionError("invalid control character in URL")
    if raw == "":
        raise CoercionError("empty url")
    if raw == "*":
        return RequestURI(path="*")

    scheme, rest = _split_scheme(raw)
    scheme = scheme.lower()

    if rest.endswith("?") and rest.count("?") == 1:
        rest, query = rest[:-1], ""
    else:
        rest, _, query = rest.partition("?")

    if not rest.startswith("/"):
        if scheme:
            return RequestURI(scheme=scheme, opaque=rest, query=query)
        raise CoercionError("invalid URI for request")

    userinfo = host = ""
    if scheme and rest.startswith("//"):
        authority, slash, path = rest[2:].partition("/")
        rest = slash + path
        userinfo, host = _parse_authority(authority)

    _check_escapes(rest)
    return RequestURI(scheme=scheme, userinfo=userinfo, host=host, path=rest, query=query)


def _validate_url(raw: str) -> RequestURI:
    if not raw.strip():
        raise CoercionError("empty URL")
    if raw != raw.strip():
        raise CoercionError(f"URL has surrounding whitespace: {raw!r}")
    return parse_request_uri(raw)


def parse_url(raw: str) -> str:
    """Accept any valid request target and return it unchanged."""
    _validate_url(raw)
    return raw


def parse_http_url(raw: str) -> str:
    """Accept a valid request target whose scheme is http or https."""
    uri = _validate_url(raw)
    if uri.scheme not in HTTP_SCHEMES:
        raise CoercionError(
            f"HTTPURL only accepts http:// or https:// protocols, got: {uri.scheme}://"
        )
    return raw
