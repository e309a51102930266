import click

from . import pass_config
from ...uri import URI


@click.command()
@pass_config
@click.argument("reference")
@click.option("-b", "--base", help="Base URI to resolve against, defaults to the base.uri configuration option.")
def join(config, reference, base):
    """Resolve the REFERENCE against a base URI.
    """
    base = base or config.base_uri
    if not base:
        raise click.UsageError("No base URI given and base.uri is not set in the configuration.")
    joined = URI.from_string_with_base(URI.from_string(base), reference)
    if config.normalize_output:
        joined.normalize()
    click.echo(joined)
