import sys
import click

from . import pass_config
from .utils import print_uri
from ...parser import is_valid
from ...uri import URI, equal as uri_equal, get_location


@click.command()
@pass_config
@click.argument("uri")
@click.option("-n", "--normalize", is_flag=True, help="Normalize the URI before printing it.")
@click.option("-f", "--format", type=click.Choice(["text", "yaml"]), help="Output format.")
def parse(config, uri, normalize, format):
    """Print the components of the given URI.
    """
    parsed = URI.from_string(uri)
    if normalize or config.normalize_output:
        parsed.normalize()
    print_uri(parsed, format or config.output_format)


@click.command()
@click.argument("uri")
def normalize(uri):
    """Print the normalized form of the URI.
    """
    parsed = URI.from_string(uri)
    parsed.normalize()
    click.echo(parsed)


@click.command()
@click.argument("first")
@click.argument("second")
def equal(first, second):
    """Compare the URIs FIRST and SECOND after normalization.
    """
    click.echo(uri_equal(URI.from_string(first), URI.from_string(second)))


@click.command()
@click.argument("uris", nargs=-1, required=True)
def valid(uris):
    """Check whether each of the given URIS is valid.
    """
    all_valid = True
    for uri in uris:
        result = is_valid(uri)
        all_valid = all_valid and result
        click.echo(f"{uri}: {'valid' if result else 'invalid'}")
    if not all_valid:
        sys.exit(1)


@click.command()
@click.argument("uri")
def location(uri):
    """Print the decoded location (host and path) of the URI.
    """
    click.echo(get_location(uri))
