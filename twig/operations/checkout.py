"""Checkout and reset operations for Twig."""

import logging
from typing import Iterable, List, Optional
from twig.core.errors import NotFoundError, InvalidStateError
from twig.core.objects import Blob, Commit

logger = logging.getLogger(__name__)

UNTRACKED_IN_THE_WAY = (
    "There is an untracked file in the way; delete it, or add and commit it first."
)


class CheckoutEngine:
    """
    Replaces working tree contents with the files of a commit.

    Supports:
    - Switching branches
    - Restoring a single file from a commit
    - Resetting the current branch to a commit
    """

    def __init__(self, repo):
        """
        Initialize checkout engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def untracked_in_the_way(self, current: Commit, paths: Iterable[str]) -> List[str]:
        """
        Find working files that an update of paths would clobber.

        A file is in the way when it exists in the working tree but the
        current commit does not track it.

        Args:
            current: Current commit
            paths: Paths about to be written or deleted

        Returns:
            Sorted list of offending paths
        """
        return sorted(
            path for path in set(paths)
            if not current.has_file(path) and self.repo.working_path(path).is_file()
        )

    def ensure_nothing_in_the_way(self, current: Commit, paths: Iterable[str]) -> None:
        """
        Raises:
            InvalidStateError: If an untracked file would be overwritten
        """
        blocked = self.untracked_in_the_way(current, paths)
        if blocked:
            logger.debug("untracked files in the way: %s", blocked)
            raise InvalidStateError(UNTRACKED_IN_THE_WAY)

    def write_blob(self, path: str, blob_hash: str) -> None:
        """Write the content of a stored blob to a working file."""
        blob = self.repo.objects.get(blob_hash, Blob)
        self.repo.write_working_file(path, blob.data)

    def replace_tree(self, current: Commit, target: Commit) -> int:
        """
        Make the working tree match target.

        Files tracked by current but not by target are deleted; every file
        tracked by target is written. Untracked files are left alone.

        Returns:
            Number of files written
        """
        for path in current.tracked:
            if not target.has_file(path):
                self.repo.delete_working_file(path)

        for path, blob_hash in target.tracked.items():
            self.write_blob(path, blob_hash)

        return len(target.tracked)

    def checkout_branch(self, branch_name: str) -> int:
        """
        Switch to a branch.

        Returns:
            Number of files written

        Raises:
            NotFoundError: If the branch doesn't exist
            InvalidStateError: If it is the current branch, or an untracked
                file would be overwritten
        """
        refs = self.repo.refs
        target_hash = refs.read_branch(branch_name)
        if target_hash is None:
            raise NotFoundError("No such branch exists.")
        if refs.get_current_branch() == branch_name:
            raise InvalidStateError("No need to checkout the current branch.")

        current = self.repo.head_commit()
        target = self.repo.objects.get(target_hash, Commit)
        self.ensure_nothing_in_the_way(current, target.tracked)

        count = self.replace_tree(current, target)
        refs.set_head(branch_name)
        self.repo.clear_index()

        logger.debug("switched to %s", branch_name)
        return count

    def checkout_file(self, path, commit_ref: Optional[str] = None) -> str:
        """
        Restore one file from a commit into the working tree.

        The staging index and refs are not changed.

        Args:
            path: File path
            commit_ref: Commit to read from (defaults to HEAD)

        Returns:
            str: Canonical path written

        Raises:
            NotFoundError: If the commit or the file in it doesn't exist
        """
        commit_hash = self.repo.resolve_commit(commit_ref)
        commit = self.repo.objects.get(commit_hash, Commit)
        rel_path = self.repo.canonical_path(path)

        blob_hash = commit.get_file(rel_path)
        if blob_hash is None:
            raise NotFoundError("File does not exist in that commit.")

        self.write_blob(rel_path, blob_hash)
        return rel_path

    def reset(self, commit_ref: str) -> str:
        """
        Move the current branch to a commit and check out its files.

        Returns:
            str: Hash of the commit reset to

        Raises:
            NotFoundError: If the commit doesn't exist
            InvalidStateError: If an untracked file would be overwritten
        """
        target_hash = self.repo.resolve_commit(commit_ref)
        target = self.repo.objects.get(target_hash, Commit)
        current = self.repo.head_commit()
        self.ensure_nothing_in_the_way(current, target.tracked)

        self.replace_tree(current, target)
        self.repo.refs.update_branch(self.repo.refs.get_current_branch(), target_hash)
        self.repo.clear_index()

        logger.debug("reset to %s", target_hash)
        return target_hash

    def fast_forward(self, target_hash: str) -> None:
        """
        Move the current branch forward to a descendant commit.

        Raises:
            InvalidStateError: If an untracked file would be overwritten
        """
        self.reset(target_hash)
