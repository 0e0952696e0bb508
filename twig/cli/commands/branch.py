"""Branch commands - create, list and remove branches."""

import click
from colorama import Fore, Style
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, short_hash


@click.command('branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit hash and message')
@click.argument('branch_name', required=False)
def branch_cmd(verbose, branch_name):
    """
    List or create branches.

    With no arguments, lists all branches; the current branch is marked
    with *. With a name, creates a branch at the current commit without
    switching to it.

    Examples:
        twig branch                 # List branches
        twig branch -v              # List branches with commit info
        twig branch feature         # Create 'feature' at HEAD
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        if branch_name:
            commit_hash = repo.branch(branch_name)
            click.echo(success(f"Created branch '{branch_name}' at {short_hash(repo, commit_hash)}"))
            return

        current_branch = repo.refs.get_current_branch()
        for name, commit_hash in repo.refs.list_branches():
            if name == current_branch:
                line = f"{Fore.GREEN}* {name}{Style.RESET_ALL}"
            else:
                line = f"  {name}"

            if verbose:
                commit = repo.objects.get(commit_hash)
                summary = commit.message.split('\n')[0][:50]
                line = f"{line:<30} {short_hash(repo, commit_hash)} {summary}"
            click.echo(line)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.command('rm-branch')
@click.argument('branch_name')
def rm_branch_cmd(branch_name):
    """
    Delete a branch pointer.

    Commits made on the branch are kept.

    Examples:
        twig rm-branch feature
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        repo.remove_branch(branch_name)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Deleted branch {branch_name}"))
