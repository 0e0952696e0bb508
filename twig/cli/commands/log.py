"""Log commands - show commit history and search it."""

import click
from colorama import Fore, Style
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import error, short_hash, format_date


def format_commit(repo, commit_hash, commit):
    """
    Format one log entry.

    ===
    commit <hash>
    Merge: <parent1> <parent2>     (merge commits only)
    Date: <date>
    <message>
    """
    lines = [
        '===',
        f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}",
    ]
    if commit.is_merge:
        lines.append(f"Merge: {short_hash(repo, commit.parents[0])} {short_hash(repo, commit.parents[1])}")
    lines.append(f"Date: {format_date(commit.timestamp, commit.timezone)}")
    lines.append(commit.message)
    lines.append('')
    return '\n'.join(lines)


def _find_repository():
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()
    return repo


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits to show')
def log_cmd(max_count):
    """
    Show history of the current branch.

    Follows first parents from HEAD back to the initial commit, so commits
    brought in by merges are not listed.

    Examples:
        twig log
        twig log -n 5
    """
    repo = _find_repository()

    try:
        history = repo.log()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if max_count is not None:
        history = history[:max_count]

    for commit_hash, commit in history:
        click.echo(format_commit(repo, commit_hash, commit))


@click.command('global-log')
def global_log_cmd():
    """
    Show every commit ever made, newest first.

    Examples:
        twig global-log
    """
    repo = _find_repository()

    try:
        commits = repo.global_log()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    for commit_hash, commit in commits:
        click.echo(format_commit(repo, commit_hash, commit))


@click.command('find')
@click.argument('message')
def find_cmd(message):
    """
    Print the ids of all commits with the given message.

    Examples:
        twig find "initial commit"
    """
    repo = _find_repository()

    try:
        matches = repo.find(message)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not matches:
        click.echo(error("Found no commit with that message."))
        raise click.Abort()

    for commit_hash in matches:
        click.echo(commit_hash)
