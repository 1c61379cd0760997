"""
Command-line interface for mailgroups.

CLI Structure:
    mailgroups [--config PATH] [--env PATH] match ADDRESS [--group NAME]
    mailgroups [--config PATH] [--env PATH] list
"""
import sys
import logging
from pathlib import Path

import click

from mailgroups import __version__
from mailgroups.config import ConfigError, load_env_vars
from mailgroups.config_loader import ConfigLoader
from mailgroups.logger import configure_logging
from mailgroups.registry import GroupRegistry
from mailgroups.statements import GroupStatementError, build_registry

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name='mailgroups')
@click.option(
    '--config',
    type=click.Path(path_type=Path),
    default='config/groups.yaml',
    envvar='MAILGROUPS_CONFIG',
    help='Path to YAML groups configuration file (default: config/groups.yaml)'
)
@click.option(
    '--env',
    type=click.Path(path_type=Path),
    default='.env',
    help='Path to .env file (default: .env)'
)
@click.pass_context
def cli(ctx: click.Context, config: Path, env: Path):
    """
    mailgroups: test email addresses against named address groups.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = str(config)
    ctx.obj['env_path'] = str(env)


def _load_registry(ctx: click.Context) -> GroupRegistry:
    """
    Load configuration and build the registry, exiting with status 1 on failure.
    """
    if 'registry' in ctx.obj:
        return ctx.obj['registry']

    load_env_vars(ctx.obj['env_path'])
    try:
        config = ConfigLoader(ctx.obj['config_path']).load()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    configure_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        fmt=config.logging.format
    )

    try:
        registry = build_registry(config)
    except GroupStatementError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    ctx.obj['registry'] = registry
    return registry


@cli.command()
@click.argument('address')
@click.option(
    '--group', 'group_name',
    type=str,
    help='Only test membership of this group.'
)
@click.pass_context
def match(ctx: click.Context, address: str, group_name: str):
    """
    Show which groups ADDRESS belongs to.

    Exits 0 when the address matches at least one group, 1 otherwise.
    """
    registry = _load_registry(ctx)

    if group_name:
        matched = registry.match(group_name, address)
        click.echo("yes" if matched else "no")
        sys.exit(0 if matched else 1)

    names = registry.matching_groups(address)
    for name in names:
        click.echo(name)
    sys.exit(0 if names else 1)


@cli.command(name='list')
@click.pass_context
def list_groups(ctx: click.Context):
    """List every group with its addresses and patterns."""
    registry = _load_registry(ctx)

    if not len(registry):
        click.echo("No groups defined.")
        return

    for group in registry:
        click.echo(group.name)
        for address in group.addresses:
            click.echo(f"  address: {address}")
        for pattern in group.patterns.patterns:
            click.echo(f"  pattern: {pattern}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
