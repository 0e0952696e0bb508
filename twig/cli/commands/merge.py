"""Merge command - join another branch into the current one."""

import click
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, info, warning, short_hash


@click.command('merge')
@click.argument('branch')
def merge_cmd(branch):
    """
    Merge BRANCH into the current branch.

    If BRANCH is an ancestor of the current branch nothing happens. If the
    current branch is an ancestor of BRANCH it is fast-forwarded. Otherwise
    a merge commit with two parents is created; files changed differently on
    both sides are committed with conflict markers.

    Examples:
        twig merge feature
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        result = repo.merge_branch(branch)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.is_up_to_date:
        click.echo(info("Given branch is an ancestor of the current branch."))
        return

    if result.is_fast_forward:
        click.echo(success("Current branch fast-forwarded."))
        return

    if result.has_conflicts:
        click.echo(warning("Encountered a merge conflict."))
        for conflict in result.conflicts:
            click.echo(warning(f"  CONFLICT: {conflict.path}"))

    click.echo(success(f"Merge made: {short_hash(repo, result.commit_hash)}"))
