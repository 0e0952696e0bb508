"""Reset command - move the current branch to a commit."""

import click
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, short_hash


@click.command('reset')
@click.argument('commit')
def reset_cmd(commit):
    """
    Reset the current branch to COMMIT.

    Checks out every file tracked by COMMIT, deletes files tracked by the
    current commit that COMMIT lacks, moves the current branch to COMMIT and
    clears the staging area. COMMIT may be abbreviated.

    Examples:
        twig reset a1b2c3d
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        commit_hash = repo.reset(commit)
        message = repo.head_commit().message.split('\n')[0]
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"HEAD is now at {short_hash(repo, commit_hash)} {message}"))
