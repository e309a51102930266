# -*- coding: utf-8 -*-
"""urikit.

urikit is a URI reference library following RFC 3986: parsing, serialisation, normalisation, reference resolution
and component level editing of URIs.

The package comes in two parts:
    * The library, centred on the URI class, for use by code that needs to pick apart, build or resolve URIs.
    * The command line interface (CLI) tool which users can run on the command line to inspect, normalise and join
      URIs.
"""
from importlib import metadata
from typing import Tuple, cast

from .errors import UriError, MalformedUri, InvalidMutation, UnsupportedScheme
from .parser import is_valid, get_protocol, has_protocol, protocol_is_valid
from .query import Query
from .uri import URI, NO_PORT, equal, join, join_strings, construct, get_location

try:
    __version__: str = metadata.version("urikit")
except metadata.PackageNotFoundError:
    # When running from a source checkout without installing
    __version__: str = "0.0.0"
__version_info__: Tuple[str, str, str] = cast(Tuple[str, str, str], tuple(__version__.split('.')))
