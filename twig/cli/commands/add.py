"""Add command - stage files for commit."""

import click
from pathlib import Path
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Staging a file whose content matches the current commit unstages it
    instead, and cancels a pending removal.

    Examples:
        twig add file.txt
        twig add src/a.py src/b.py
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    staged = []
    unchanged = []

    try:
        for path in paths:
            file_path = Path(path)
            if not file_path.is_absolute():
                file_path = Path.cwd() / file_path

            if repo.add(file_path):
                staged.append(path)
            else:
                unchanged.append(path)
    except TwigError as e:
        click.echo(error(f"{path}: {e}"))
        raise click.Abort()

    if staged:
        click.echo(success(f"Added {len(staged)} file(s) to staging area"))
        for path in staged:
            click.echo(info(f"  {path}"))

    for path in unchanged:
        click.echo(info(f"{path} matches the current commit, nothing staged"))
