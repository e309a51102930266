import click

from ...config.config import OPTIONS


def validate_option(ctx, param, value):
    if value not in OPTIONS:
        raise click.BadParameter(f"unknown option, expected one of {', '.join(OPTIONS)}")
    return value
