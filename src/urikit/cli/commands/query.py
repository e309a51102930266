import click

from ...errors import InvalidMutation
from ...uri import URI


@click.group()
def query():
    """Read and edit the query of a URI.
    """
    pass


@query.command()
@click.argument("uri")
@click.argument("key")
def get(uri, key):
    """Print the value of KEY in the query of the URI.
    """
    parsed = URI.from_string(uri)
    if not parsed.query_has_key(key):
        raise KeyError(f"Query key {key} not found in {uri}")
    value = parsed.get_query_value(key)
    click.echo("" if value is None else value)


@query.command()
@click.argument("uri")
@click.argument("key")
@click.argument("value", required=False)
def set(uri, key, value):
    """Set KEY to VALUE in the query of the URI and print the result. Without VALUE the key is set bare.
    """
    parsed = URI.from_string(uri)
    if not parsed.set_query_value(key, value):
        raise InvalidMutation(f"Failed to set query key {key}")
    click.echo(parsed)


@query.command()
@click.argument("uri")
@click.argument("key")
def remove(uri, key):
    """Remove KEY from the query of the URI and print the result.
    """
    parsed = URI.from_string(uri)
    if not parsed.remove_query_key(key):
        raise InvalidMutation(f"Query key {key} not found in {uri}")
    click.echo(parsed)
