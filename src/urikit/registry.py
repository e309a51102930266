import logging
from typing import Any, Callable, Dict, List

from .errors import MalformedUri, UnsupportedScheme
from .parser import is_valid, protocol_is_valid
from .uri import URI

logger = logging.getLogger(__name__)

Handler = Callable[[URI], Any]


class SchemeRegistry:
    """
    Map of URI schemes to the handlers that build objects for them.

    Schemes are matched case-insensitively.
    """

    _handlers: Dict[str, Handler]

    def __init__(self) -> None:
        self._handlers = {}

    def register(self, scheme: str, handler: Handler) -> None:
        if not protocol_is_valid(scheme):
            raise ValueError(f"Invalid scheme '{scheme}'")
        logger.debug("registering handler %r for scheme %s", handler, scheme)
        self._handlers[scheme.lower()] = handler

    def unregister(self, scheme: str) -> None:
        try:
            del self._handlers[scheme.lower()]
        except KeyError:
            raise KeyError(f"Scheme {scheme} not registered")

    def supports(self, scheme: str) -> bool:
        return scheme.lower() in self._handlers

    def schemes(self) -> List[str]:
        return sorted(self._handlers)

    def make_from_uri(self, text: str) -> Any:
        """
        Create an object for the given URI string using the handler registered for its scheme.

        :param text: The URI string.
        :return: Whatever the handler returns for the parsed URI.
        :raises MalformedUri: If the text is not a valid URI.
        :raises UnsupportedScheme: If no handler is registered for the scheme of the URI.
        """
        if not is_valid(text):
            raise MalformedUri(f"Invalid URI '{text}'", text)
        uri = URI.from_string(text)
        scheme = uri.scheme.lower()
        handler = self._handlers.get(scheme)
        if handler is None:
            raise UnsupportedScheme(scheme)
        logger.debug("using handler %r for %s", handler, text)
        return handler(uri)
