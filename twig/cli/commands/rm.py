"""Rm command - unstage files or stage them for removal."""

import click
from pathlib import Path
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error


@click.command('rm')
@click.argument('paths', nargs=-1, required=True)
def rm_cmd(paths):
    """
    Remove files from the staging area or from tracking.

    A file staged for addition is unstaged. A file tracked by the current
    commit is staged for removal and deleted from the working tree.

    Examples:
        twig rm notes.txt
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    for path in paths:
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path

        try:
            outcome = repo.remove(file_path)
        except TwigError as e:
            click.echo(error(f"{path}: {e}"))
            raise click.Abort()

        if outcome == 'unstaged':
            click.echo(success(f"Unstaged {path}"))
        else:
            click.echo(success(f"Staged {path} for removal"))
