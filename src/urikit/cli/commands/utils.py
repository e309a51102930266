from typing import Dict, Any

import click
import yaml

from ...uri import URI


def uri_to_dict(uri: URI) -> Dict[str, Any]:
    return {
        "scheme": uri.scheme,
        "userinfo": uri.userinfo,
        "host": uri.host,
        "port": uri.port,
        "path": uri.path,
        "query": [[k, v] for k, v in uri.query.items()] if uri.query is not None else None,
        "fragment": uri.fragment,
    }


def print_uri(uri: URI, format: str = "text") -> None:
    """
    Print the components of the URI, either one 'name: value' line per component or as a YAML document.
    """
    values = uri_to_dict(uri)
    if format == "yaml":
        click.echo(yaml.safe_dump(values, default_flow_style=False, sort_keys=False), nl=False)
        return

    column_width = max(len(name) for name in values)
    for name, value in values.items():
        if name == "query" and value is not None:
            value = uri.query_string
        click.echo(f"{name:<{column_width}}  {'' if value is None else value}")
