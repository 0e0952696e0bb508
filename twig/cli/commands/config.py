"""Config command - manage repository configuration."""

import click
from twig.core.config import Config, split_key
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, info


def load_config(is_global):
    """Config for the enclosing repository, or global-only config."""
    repo = Repository.find_repository()
    if not is_global and not repo:
        click.echo(error("Not a twig repository (use --global for global config)"))
        raise click.Abort()
    return Config(repo.config_file if repo else None)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        twig config set core.abbrev 10
        twig config set --global init.defaultbranch main
    """
    config = load_config(is_global)

    try:
        section, option = split_key(key)
        config.set(section, option, value, global_config=is_global)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Without --global the value seen by the repository is printed, including
    environment overrides and built-in defaults.

    Examples:
        twig config get core.abbrev
    """
    try:
        section, option = split_key(key)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if is_global:
        config = Config()
        values = config.list_all(global_only=True)
        value = values.get(section, {}).get(option)
    else:
        repo = Repository.find_repository()
        config = Config(repo.config_file if repo else None)
        value = config.get(section, option)

    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """
    Remove a config value.

    Examples:
        twig config unset core.abbrev
    """
    config = load_config(is_global)

    try:
        section, option = split_key(key)
        removed = config.unset(section, option, global_config=is_global)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not removed:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(success(f"Unset {key}"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        twig config list
        twig config list --global
    """
    repo = None if is_global else Repository.find_repository()
    config = Config(repo.config_file if repo else None)
    values = config.list_all(global_only=is_global)

    if not values:
        click.echo(info("No configuration set"))
        return

    for section in sorted(values):
        for key, value in sorted(values[section].items()):
            click.echo(f"{section}.{key}={value}")
