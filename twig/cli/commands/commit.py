"""Commit command - create a commit from staged changes."""

import click
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, short_hash


@click.command('commit')
@click.option('-m', '--message', 'message_opt', help='Commit message')
@click.argument('message', required=False)
def commit_cmd(message_opt, message):
    """
    Record staged changes in a new commit.

    The new commit tracks everything the current commit tracks, with the
    staged additions and removals applied. The staging area is then
    cleared.

    Examples:
        twig commit -m "Add parser"
        twig commit "Add parser"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    message = message_opt if message_opt is not None else message

    try:
        branch = repo.refs.get_current_branch()
        commit_hash = repo.commit(message or '')
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"[{branch} {short_hash(repo, commit_hash)}] {message}"))
