import re
from typing import List, Optional, Tuple, Union

from . import escape
from . import path as pathlib
from .errors import MalformedUri
from .escape import Component
from .parser import parse, protocol_is_valid, host_is_valid, is_valid, MAX_PORT
from .query import Query

NO_PORT: Optional[int] = None

_DRIVE_LOCATION = re.compile(r"^[A-Za-z][:|](/|$)")


def _encode_path(path: str) -> List[str]:
    return [escape.encode(segment, Component.PATH_SEGMENT) for segment in pathlib.split(path)]


def _encode_query(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return escape.encode(value, Component.QUERY)


class URI:
    """
    Class for parsing and representing a URI reference (RFC 3986).

    Components are stored raw, as they appear in the URI text. Values passed to the set_* methods are percent-encoded
    for their component, keeping any escapes already present. A URI is a plain value: copy it before changing it if
    the original is still needed.
    """

    def __init__(self, scheme: Optional[str] = None, userinfo: Optional[str] = None, host: Optional[str] = None,
                 port: Optional[int] = NO_PORT, path: Union[str, List[str], None] = None,
                 query: Union[str, Query, None] = None, fragment: Optional[str] = None) -> None:
        """
        Create a URI from its components. Nothing is encoded or normalised.

        :param scheme: The URI scheme, or None for a relative reference.
        :param userinfo: The user information of the authority.
        :param host: The host, None if the URI has no authority.
        :param port: The port, or NO_PORT.
        :param path: The path, either as a string or as a list of segments.
        :param query: The query as a Query, or as an opaque string stored as a single key.
        :param fragment: The fragment.
        """
        if port is not NO_PORT and not 0 <= port <= MAX_PORT:
            raise MalformedUri(f"Port {port} out of range")
        self._scheme: Optional[str] = scheme
        self._userinfo: Optional[str] = userinfo
        self._host: Optional[str] = host
        self._port: Optional[int] = port
        self._path: List[str] = pathlib.split(path) if isinstance(path, str) else list(path or [])
        if isinstance(query, str):
            query = Query.from_opaque(query)
        self._query: Optional[Query] = query.copy() if query is not None else None
        self._fragment: Optional[str] = fragment

    @classmethod
    def from_string(cls, text: str) -> "URI":
        """
        Parse a URI reference.

        :param text: The URI reference text.
        :return: The parsed URI, a relative reference if the text has no scheme.
        :raises MalformedUri: If the text is not a URI reference.
        """
        return cls(**parse(text))

    @classmethod
    def from_string_with_base(cls, base: Optional["URI"], text: str) -> "URI":
        """
        Parse a URI reference and resolve it against base.
        """
        return join(base, cls.from_string(text))

    @classmethod
    def with_base(cls, base: Optional["URI"], scheme: Optional[str] = None, userinfo: Optional[str] = None,
                  host: Optional[str] = None, port: Optional[int] = NO_PORT, path: Optional[str] = None,
                  query: Union[str, Query, None] = None, fragment: Optional[str] = None) -> "URI":
        """
        Create a URI from components, taking anything left out from base.

        Omitted scheme, userinfo, host and port are those of base. A relative path is resolved against the path of
        base, an absolute one replaces it. Query and fragment follow reference resolution: without a path the query
        of base is kept when none is given, the fragment of base is never kept.

        :raises MalformedUri: If the given scheme or port is invalid.
        """
        result = join(base, cls(path=path, query=query, fragment=fragment))
        if scheme is not None and not result.set_scheme(scheme):
            raise MalformedUri(f"Invalid scheme '{scheme}'")
        if userinfo is not None:
            result._userinfo = userinfo
        if host is not None:
            result._host = host
        if port is not NO_PORT and not result.set_port(port):
            raise MalformedUri(f"Port {port} out of range")
        return result

    def copy(self) -> "URI":
        return URI(self._scheme, self._userinfo, self._host, self._port, self._path, self._query, self._fragment)

    @property
    def uri(self) -> str:
        """
        Return the URI object as a URI string.

        :return: A string representation of the URI.
        """
        path = self._path
        uri = ""
        if self._scheme is not None:
            uri += f"{self._scheme}:"
        if self._host is not None:
            uri += "//"
            if self._userinfo is not None:
                uri += f"{self._userinfo}@"
            uri += self._host
            if self._port is not NO_PORT:
                uri += f":{self._port}"
            if path and path[0] != "":
                uri += "/"
        elif len(path) > 2 and path[0] == "" and path[1] == "":
            # would read back as an authority
            uri += "/."
        elif self._scheme is None and path and ":" in path[0]:
            # would read back as a scheme
            uri += "./"
        uri += pathlib.join(path)
        if self._query is not None:
            uri += f"?{self._query}"
        if self._fragment is not None:
            uri += f"#{self._fragment}"
        return uri

    def to_string(self) -> str:
        return self.uri

    def __repr__(self):
        return f"URI({self.uri})"

    def __str__(self):
        return self.uri

    def __eq__(self, other):
        if not isinstance(other, URI):
            return NotImplemented
        return equal(self, other)

    @property
    def scheme(self) -> Optional[str]:
        return self._scheme

    @property
    def userinfo(self) -> Optional[str]:
        return self._userinfo

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def port(self) -> Optional[int]:
        return self._port

    @property
    def has_authority(self) -> bool:
        return self._host is not None

    @property
    def path(self) -> str:
        return pathlib.join(self._path)

    @property
    def path_segments(self) -> List[str]:
        return list(self._path)

    @property
    def query(self) -> Optional[Query]:
        return self._query

    @property
    def query_string(self) -> Optional[str]:
        return str(self._query) if self._query is not None else None

    @property
    def query_keys(self) -> List[str]:
        return self._query.keys() if self._query is not None else []

    @property
    def fragment(self) -> Optional[str]:
        return self._fragment

    def query_has_key(self, key: str) -> bool:
        return self._query is not None and self._query.has(_encode_query(key))

    def get_query_value(self, key: str) -> Optional[str]:
        if self._query is None:
            return None
        return self._query.get(_encode_query(key))

    def get_media_fragment_table(self) -> Optional[Query]:
        """
        Return the fragment read as '&' separated key=value pairs, as used by media fragments (e.g. '#t=10,20').
        """
        if self._fragment is None:
            return None
        return Query.from_string(self._fragment)

    def set_scheme(self, scheme: Optional[str]) -> bool:
        if scheme is not None and not protocol_is_valid(scheme):
            return False
        self._scheme = scheme
        return True

    def set_userinfo(self, userinfo: Optional[str]) -> bool:
        self._userinfo = escape.encode(userinfo, Component.USERINFO) if userinfo is not None else None
        return True

    def set_host(self, host: Optional[str]) -> bool:
        if host is not None and not host_is_valid(host):
            return False
        self._host = host
        return True

    def set_port(self, port: Optional[int]) -> bool:
        if port is not NO_PORT and (not isinstance(port, int) or not 0 <= port <= MAX_PORT):
            return False
        self._port = port
        return True

    def set_path(self, path: Optional[str]) -> bool:
        self._path = _encode_path(path) if path is not None else []
        return True

    def set_path_segments(self, segments: Optional[List[str]]) -> bool:
        self._path = [escape.encode(segment, Component.PATH_SEGMENT) for segment in segments or []]
        return True

    def append_path_segment(self, segment: Optional[str]) -> bool:
        if segment is not None:
            self._path = pathlib.append_segment(self._path, escape.encode(segment, Component.PATH_SEGMENT))
        return True

    def append_path(self, path: Optional[str]) -> bool:
        if path is not None:
            self._path = pathlib.append_path(self._path, pathlib.join(_encode_path(path)))
        return True

    def set_query_string(self, query: Optional[str]) -> bool:
        if query is None:
            self._query = None
        else:
            self._query = Query.from_string(query).map(lambda s: escape.encode(s, Component.QUERY))
        return True

    def set_query_table(self, query: Optional[Query]) -> bool:
        self._query = query.copy() if query is not None else None
        return True

    def set_query_value(self, key: str, value: Optional[str]) -> bool:
        """
        Set a query parameter, adding a query to the URI if it has none.

        :param key: The parameter name.
        :param value: The parameter value, or None for a bare key.
        :return: True.
        """
        if self._query is None:
            self._query = Query()
        self._query.set(_encode_query(key), _encode_query(value))
        return True

    def remove_query_key(self, key: str) -> bool:
        if self._query is None:
            return False
        return self._query.remove(_encode_query(key))

    def set_fragment(self, fragment: Optional[str]) -> bool:
        self._fragment = escape.encode(fragment, Component.FRAGMENT) if fragment is not None else None
        return True

    def _components(self) -> Tuple:
        return self._scheme, self._userinfo, self._host, self._port, self._path, self._query, self._fragment

    def _normalized_components(self) -> Tuple:
        scheme = self._scheme.lower() if self._scheme is not None else None
        userinfo = escape.normalize(self._userinfo) if self._userinfo is not None else None
        host = escape.normalize(escape.normalize(self._host).lower()) if self._host is not None else None
        path = [escape.normalize(segment) for segment in self._path]
        if host is not None and path and path[0] != "":
            path = [""] + path
        if scheme is not None or pathlib.is_absolute(path):
            path = pathlib.remove_dot_segments(path)
        else:
            path = pathlib.drop_current_segments(path)
        query = self._query.map(escape.normalize) if self._query is not None else None
        fragment = escape.normalize(self._fragment) if self._fragment is not None else None
        return scheme, userinfo, host, self._port, path, query, fragment

    def normalize(self) -> bool:
        """
        Normalise the URI in place (RFC 3986 section 6.2.2).

        The scheme and host are lower-cased, percent escapes of unreserved characters decoded and all other escapes
        upper-cased, and dot segments removed from the path.

        :return: True if anything was changed.
        """
        normalized = self._normalized_components()
        if normalized == self._components():
            return False
        (self._scheme, self._userinfo, self._host, self._port, self._path, self._query,
         self._fragment) = normalized
        return True

    def is_normalized(self) -> bool:
        return self._normalized_components() == self._components()

    def join(self, ref: Optional["URI"]) -> "URI":
        return join(self, ref)


def equal(first: Optional[URI], second: Optional[URI]) -> bool:
    """
    Compare two URIs by their normalised components. Two missing URIs are equal.
    """
    if first is None or second is None:
        return first is second
    return first._normalized_components() == second._normalized_components()


def join(base: Optional[URI], ref: Optional[URI]) -> Optional[URI]:
    """
    Resolve a reference against a base URI (RFC 3986 section 5.3).

    :param base: The base URI.
    :param ref: The reference to resolve.
    :return: A new URI, or None if both are None.
    """
    if ref is None:
        return base.copy() if base is not None else None
    if base is None or ref.scheme is not None:
        return ref.copy()

    result = URI(scheme=base.scheme, fragment=ref.fragment)
    if ref.has_authority:
        result._userinfo, result._host, result._port = ref.userinfo, ref.host, ref.port
        result._path = pathlib.remove_dot_segments(ref.path_segments)
        result.set_query_table(ref.query)
        return result

    result._userinfo, result._host, result._port = base.userinfo, base.host, base.port
    ref_path = ref.path_segments
    if not ref_path:
        result._path = base.path_segments
        result.set_query_table(ref.query if ref.query is not None else base.query)
        return result

    if not pathlib.is_absolute(ref_path):
        ref_path = pathlib.merge(base.path_segments, ref_path, base.has_authority)
    result._path = pathlib.remove_dot_segments(ref_path)
    result.set_query_table(ref.query)
    return result


def join_strings(base: str, ref: str) -> str:
    """
    Resolve the reference string ref against the base URI string.
    """
    return str(join(URI.from_string(base), URI.from_string(ref)))


def construct(protocol: str, location: str) -> str:
    """
    Build a 'protocol://location' URI string, escaping the location as a path.

    :raises MalformedUri: If the protocol is not a valid scheme.
    """
    if not protocol_is_valid(protocol):
        raise MalformedUri(f"Invalid protocol '{protocol}'")
    return f"{protocol.lower()}://{pathlib.join(_encode_path(location or ''))}"


def get_location(text: str) -> str:
    """
    Return the location part of a URI string: host and path for URIs with an authority, the path otherwise, with
    percent escapes decoded.

    The 'file://c:/path' form, where a drive letter takes the place of the host, is returned as 'c:/path'. The
    'file:///c:/path' form is returned as '/c:/path'.

    :param text: The URI string.
    :return: The location, '' if the URI has neither host nor path.
    :raises MalformedUri: If the text is not a valid URI.
    """
    if not is_valid(text):
        raise MalformedUri(f"Invalid URI '{text}'", text)
    _, sep, rest = text.partition("://")
    if sep and _DRIVE_LOCATION.match(rest):
        location = re.split(r"[?#]", rest, maxsplit=1)[0]
        return escape.decode(location[0] + ":" + location[2:])
    uri = URI.from_string(text)
    return escape.decode((uri.host or "") + uri.path)


def set_scheme(uri: Optional[URI], scheme: Optional[str]) -> bool:
    if uri is None:
        return scheme is None
    return uri.set_scheme(scheme)


def set_userinfo(uri: Optional[URI], userinfo: Optional[str]) -> bool:
    if uri is None:
        return userinfo is None
    return uri.set_userinfo(userinfo)


def set_host(uri: Optional[URI], host: Optional[str]) -> bool:
    if uri is None:
        return host is None
    return uri.set_host(host)


def set_port(uri: Optional[URI], port: Optional[int]) -> bool:
    if uri is None:
        return port is NO_PORT
    return uri.set_port(port)


def set_path(uri: Optional[URI], path: Optional[str]) -> bool:
    if uri is None:
        return path is None
    return uri.set_path(path)


def set_path_segments(uri: Optional[URI], segments: Optional[List[str]]) -> bool:
    if uri is None:
        return segments is None
    return uri.set_path_segments(segments)


def append_path_segment(uri: Optional[URI], segment: Optional[str]) -> bool:
    if uri is None:
        return segment is None
    return uri.append_path_segment(segment)


def append_path(uri: Optional[URI], path: Optional[str]) -> bool:
    if uri is None:
        return path is None
    return uri.append_path(path)


def set_query_string(uri: Optional[URI], query: Optional[str]) -> bool:
    if uri is None:
        return query is None
    return uri.set_query_string(query)


def set_query_table(uri: Optional[URI], query: Optional[Query]) -> bool:
    if uri is None:
        return query is None
    return uri.set_query_table(query)


def set_query_value(uri: Optional[URI], key: str, value: Optional[str]) -> bool:
    if uri is None:
        return key is None
    return uri.set_query_value(key, value)


def remove_query_key(uri: Optional[URI], key: str) -> bool:
    if uri is None:
        return False
    return uri.remove_query_key(key)


def set_fragment(uri: Optional[URI], fragment: Optional[str]) -> bool:
    if uri is None:
        return fragment is None
    return uri.set_fragment(fragment)
