import click

from . import pass_config
from .validators import validate_option


@click.group()
def config():
    """Query/update the urikit configuration (base.uri, output.normalize, output.format).
    """
    pass


@config.command()
@pass_config
@click.argument("option", callback=validate_option)
def get(config, option):
    """Print the value of OPTION.
    """
    click.echo(config.get_option(option))


@config.command()
@pass_config
@click.argument("option", callback=validate_option)
@click.argument("value")
def set(config, option, value):
    """Set OPTION to VALUE in the user configuration file.

    base.uri must be an absolute URI, output.format one of text or yaml and output.normalize a boolean.
    """
    try:
        config.set_option(option, value)
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="VALUE")
    config.save()


@config.command()
@pass_config
@click.argument("option", callback=validate_option)
def delete(config, option):
    """Remove OPTION from the user configuration file.
    """
    config.delete_option(option)
    config.save()
    click.echo("Success.")


@config.command()
@pass_config
def list(config):
    """List the options set, environmental overrides last.
    """
    for i in config.list_options():
        click.echo(i)


@config.command()
@pass_config
def path(config):
    """Print the location of the user and site configuration files.
    """
    click.echo(f"user: {config.user_config_path}")
    click.echo(f"site: {config.site_config_path}")
