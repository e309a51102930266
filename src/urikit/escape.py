"""
Percent encoding of URI components (RFC 3986 section 2).
"""
import re
import string
from enum import Enum
from urllib.parse import quote, unquote

UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")
SUB_DELIMS = "!$&'()*+,;="

_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")


class Component(Enum):
    """
    URI components that are percent-encoded, valued by the characters each one
    may carry unescaped besides the unreserved set.
    """
    USERINFO = SUB_DELIMS + ":"
    PATH_SEGMENT = SUB_DELIMS + ":@"
    QUERY = "!$'()*+,;:@/?"
    FRAGMENT = SUB_DELIMS + ":@/?"


def decode(text: str) -> str:
    """
    Replace every well formed %XX escape with the character it encodes.

    Escaped bytes are read as UTF-8. Bytes that are not valid UTF-8 become lone surrogates (the surrogateescape
    error handler), so encode() writes them back unchanged. Malformed escapes (a '%' not followed by two hex
    digits) are kept literally.
    """
    if "%" not in text:
        return text
    return unquote(text, errors="surrogateescape")


def encode(text: str, component: Component) -> str:
    """
    Escape the characters of text that may not appear in the given component.

    Well formed escapes already present in the text are kept, a stray '%' is escaped.

    :param text: The text to encode.
    :param component: The URI component the text is destined for.
    :return: The encoded text.
    """
    parts = []
    pos = 0
    for match in _ESCAPE.finditer(text):
        parts.append(quote(text[pos:match.start()], safe=component.value, errors="surrogateescape"))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(quote(text[pos:], safe=component.value, errors="surrogateescape"))
    return "".join(parts)


def _normalize_escape(match: "re.Match") -> str:
    char = chr(int(match.group(1), 16))
    if char in UNRESERVED:
        return char
    return "%" + match.group(1).upper()


def normalize(text: str) -> str:
    """
    Percent-encoding normalisation: decode escaped unreserved characters and upper-case the hex digits of all
    remaining escapes.
    """
    return _ESCAPE.sub(_normalize_escape, text)
