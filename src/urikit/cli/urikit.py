import logging
import sys
import click

from .commands.config import config
from .commands.inspect import parse, normalize, equal, valid, location
from .commands.join import join
from .commands.query import query
from ..config import Config
from .. import __version__


g_debug = False


def recursive_help(cmd, parent=None):
    ctx = click.core.Context(cmd, info_name=cmd.name, parent=parent)
    click.echo(cmd.get_help(ctx))
    click.echo()
    commands = getattr(cmd, 'commands', {})
    for sub in commands.values():
        recursive_help(sub, ctx)


def _configure_logging(debug: bool, verbose: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s: %(message)s")


@click.group("urikit")
@click.version_option(__version__)
@click.option("-d", "--debug", is_flag=True, help="Run in debug mode.")
@click.option("-v", "--verbose", is_flag=True, help="Run with verbose output.")
@click.option("-c", "--config-file", type=click.File('r'), help="Config file to load.")
@click.pass_context
def cli(ctx, debug, verbose, config_file):
    _configure_logging(debug, verbose)
    if not ctx.obj:
        ctx.obj = Config()
        ctx.obj.load(config_file)
    global g_debug
    g_debug = debug


@cli.command()
def dump_help():
    recursive_help(cli)


cli.add_command(parse)
cli.add_command(normalize)
cli.add_command(equal)
cli.add_command(valid)
cli.add_command(location)
cli.add_command(join)
cli.add_command(query)
cli.add_command(config)


def main() -> None:
    """
    Main CLI entry function

    :return: None
    """
    try:
        cli()
    except Exception as ex:
        click.echo(f"Error: {ex}", err=True)
        if g_debug:
            raise ex
        sys.exit(1)
