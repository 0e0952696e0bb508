"""Checkout command - switch branches or restore files."""

import click
from pathlib import Path
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import success, error, short_hash


class CheckoutCommand(click.Command):
    """Keeps the file operands after '--' apart from the other arguments."""

    def parse_args(self, ctx, args):
        if '--' in args:
            split = args.index('--')
            ctx.meta['checkout_files'] = args[split + 1:]
            args = args[:split]
        return super().parse_args(ctx, args)


@click.command('checkout', cls=CheckoutCommand)
@click.argument('targets', nargs=-1)
@click.pass_context
def checkout_cmd(ctx, targets):
    """
    Switch branches or restore working tree files.

    \b
    twig checkout BRANCH
        Write every file of BRANCH's head commit to the working tree,
        delete files tracked only by the current branch, clear the
        staging area and make BRANCH the current branch.
    twig checkout -- FILE
        Restore FILE as it is in the current commit.
    twig checkout COMMIT -- FILE
        Restore FILE as it is in COMMIT. COMMIT may be abbreviated.

    Examples:
        twig checkout feature
        twig checkout -- hello.txt
        twig checkout a1b2c3d -- hello.txt
    """
    files = ctx.meta.get('checkout_files')

    if files is None:
        if len(targets) != 1:
            click.echo(error("Incorrect operands."))
            raise click.Abort()
    elif len(targets) > 1 or len(files) != 1:
        click.echo(error("Incorrect operands."))
        raise click.Abort()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not in an initialized Twig directory."))
        raise click.Abort()

    try:
        if files is None:
            branch_name = targets[0]
            repo.checkout_branch(branch_name)
            click.echo(success(f"Switched to branch '{branch_name}'"))
            return

        file_path = Path(files[0])
        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path

        commit_ref = targets[0] if targets else None
        commit_hash = repo.resolve_commit(commit_ref)
        repo.checkout_file(file_path, commit_hash)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Restored {files[0]} from {short_hash(repo, commit_hash)}"))
