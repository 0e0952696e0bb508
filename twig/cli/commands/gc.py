"""Gc command - delete stale staging-area snapshots."""

import click
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error


@click.command('gc')
def gc_cmd():
    """
    Delete every stored staging area except the live one.

    Examples:
        twig gc
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        removed = repo.compact()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Removed {removed} stale index object(s)"))
