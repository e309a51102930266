"""
URI reference grammar (RFC 3986 appendix A), with a minimum scheme length of two characters.
"""
import logging
import re
from typing import Dict, Any, Optional, Tuple

from . import path as pathlib
from .errors import MalformedUri
from .query import Query

logger = logging.getLogger(__name__)

SCHEME_PATTERN = r"[A-Za-z][A-Za-z0-9+.\-]+"

_SCHEME = re.compile(f"^({SCHEME_PATTERN}):")
_PROTOCOL = re.compile(f"^{SCHEME_PATTERN}$")
_HOST = re.compile(r"^(\[[^\[\]\s/?#@]*\]|[^\[\]\s/?#@:]*)$")

MAX_PORT = 65535


def protocol_is_valid(protocol: Optional[str]) -> bool:
    """
    Check whether the given string is a valid scheme name of at least two characters.
    """
    return protocol is not None and _PROTOCOL.match(protocol) is not None


def host_is_valid(host: str) -> bool:
    """
    Check that host is an IP literal in brackets or a registered name free of URI delimiters.
    """
    return _HOST.match(host) is not None


def is_valid(text: Optional[str]) -> bool:
    """
    Check whether text starts with a valid scheme followed by ':'.

    Nothing past the separator is looked at, so 'AB:foo.txt' and 'AB:\\foo.txt' are both valid while 'B:/foo.txt'
    is not.
    """
    return text is not None and _SCHEME.match(text) is not None


def get_protocol(text: str) -> Optional[str]:
    """
    Return the lower-cased scheme of a URI string, or None if it does not have a valid one.
    """
    match = _SCHEME.match(text)
    if match is None:
        return None
    return match.group(1).lower()


def has_protocol(text: str, protocol: str) -> bool:
    scheme = get_protocol(text)
    return scheme is not None and scheme == protocol.lower()


def parse_port(port: str, text: str = None) -> Optional[int]:
    if not port:
        return None
    if not port.isdigit() or not port.isascii():
        raise MalformedUri(f"Invalid port '{port}'", text)
    value = int(port)
    if value > MAX_PORT:
        raise MalformedUri(f"Port {value} out of range", text)
    return value


def _split_authority(authority: str, text: str) -> Tuple[Optional[str], str, Optional[int]]:
    userinfo = None
    if "@" in authority:
        userinfo, _, authority = authority.rpartition("@")

    if authority.startswith("["):
        end = authority.find("]")
        if end < 0:
            raise MalformedUri(f"Unterminated IP literal in '{authority}'", text)
        host, rest = authority[:end + 1], authority[end + 1:]
        if rest and not rest.startswith(":"):
            raise MalformedUri(f"Unexpected '{rest}' after IP literal", text)
        port = rest[1:]
    else:
        host, _, port = authority.partition(":")

    if not host_is_valid(host):
        raise MalformedUri(f"Invalid host '{host}'", text)

    return userinfo, host, parse_port(port, text)


def parse(text: str) -> Dict[str, Any]:
    """
    Split a URI reference into its components.

    The components are returned raw, with their percent escapes untouched.

    :param text: The URI reference.
    :return: A dictionary with the keys scheme, userinfo, host, port, path, query and fragment.
    :raises MalformedUri: If the text cannot be a URI reference.
    """
    if text is None:
        raise MalformedUri("No URI given")

    components: Dict[str, Any] = dict(scheme=None, userinfo=None, host=None, port=None, path=[], query=None,
                                      fragment=None)
    rest = text

    rest, sep, fragment = rest.partition("#")
    if sep:
        components["fragment"] = fragment

    rest, sep, query = rest.partition("?")
    if sep:
        components["query"] = Query.from_string(query)

    match = _SCHEME.match(rest)
    if match:
        components["scheme"] = match.group(1)
        rest = rest[match.end():]

    if rest.startswith("//"):
        authority, slash, rest = rest[2:].partition("/")
        rest = slash + rest
        userinfo, host, port = _split_authority(authority, text)
        components.update(userinfo=userinfo, host=host, port=port)
    elif components["scheme"] is None and ":" in rest.partition("/")[0]:
        logger.debug("rejecting %r: no valid scheme before ':'", text)
        raise MalformedUri(f"Invalid URI '{text}': no valid scheme", text)

    components["path"] = pathlib.split(rest)
    return components
