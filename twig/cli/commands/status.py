"""Status command - show working tree status."""

import click
from colorama import Fore, Style
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, info


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Branches, with the current one marked
    - Files staged for addition and for removal
    - Modifications not staged for commit
    - Untracked files

    Examples:
        twig status
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        report = repo.status()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo("=== Branches ===")
    for branch in report.branches:
        if branch == report.current_branch:
            click.echo(f"{Fore.GREEN}*{branch}{Style.RESET_ALL}")
        else:
            click.echo(branch)
    click.echo()

    click.echo("=== Staged Files ===")
    for path in report.staged:
        click.echo(f"{Fore.GREEN}{path}{Style.RESET_ALL}")
    click.echo()

    click.echo("=== Removed Files ===")
    for path in report.removed:
        click.echo(f"{Fore.GREEN}{path}{Style.RESET_ALL}")
    click.echo()

    click.echo("=== Modifications Not Staged For Commit ===")
    for path, kind in report.modified:
        click.echo(f"{Fore.YELLOW}{path} ({kind}){Style.RESET_ALL}")
    click.echo()

    click.echo("=== Untracked Files ===")
    for path in report.untracked:
        click.echo(f"{Fore.RED}{path}{Style.RESET_ALL}")
    click.echo()

    if report.is_clean:
        click.echo(success("Nothing to commit, working tree clean"))
    elif not report.staged and not report.removed:
        click.echo(info("No changes added to commit (use \"twig add\")"))
