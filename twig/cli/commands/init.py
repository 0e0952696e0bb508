"""Initialize a new Twig repository."""

import click
from pathlib import Path
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', default=None, help='Name of the first branch')
def init_cmd(path, initial_branch):
    """
    Initialize a new Twig repository.

    Creates a .twig directory holding the initial commit, the first branch
    and an empty staging area.

    Examples:
        twig init                   # Initialize in current directory
        twig init my-project        # Initialize in my-project directory
        twig init -b main           # Name the first branch 'main'
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init(default_branch=initial_branch)
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Initialized empty Twig repository in {repo.twig_dir}"))
    click.echo(info(f"On branch {repo.refs.get_current_branch()}"))
