"""Reference management for Twig."""

import logging
from typing import List, Optional, Tuple
from .errors import NotFoundError, InvalidStateError, FileSystemError
from .objects import Commit

logger = logging.getLogger(__name__)


class RefManager:
    """
    Manages references.

    Handles:
    - HEAD, a symbolic reference naming the current branch
    - Branch references (refs/heads/*) holding commit hashes
    - STAGED, holding the hash of the live staging index
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.twig_dir = repo.twig_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file
        self.staged_file = repo.staged_file

    @staticmethod
    def _read(path) -> Optional[str]:
        if not path.is_file():
            return None
        try:
            return path.read_text().strip()
        except OSError as e:
            raise FileSystemError(f"Cannot read {path.name}: {e}") from e

    @staticmethod
    def _write(path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content + '\n')
        except OSError as e:
            raise FileSystemError(f"Cannot write {path.name}: {e}") from e

    @staticmethod
    def validate_branch_name(branch_name: str) -> None:
        """
        Reject names that cannot be stored as a single ref file.

        Raises:
            InvalidStateError: If the name is not usable
        """
        if (not branch_name or branch_name.startswith('.') or '/' in branch_name
                or '\\' in branch_name or any(c.isspace() for c in branch_name)):
            raise InvalidStateError(f"Invalid branch name: '{branch_name}'")

    def read_branch(self, branch_name: str) -> Optional[str]:
        """
        Read a branch and return its commit hash.

        Returns:
            Commit hash or None if the branch doesn't exist
        """
        if not branch_name or '/' in branch_name or branch_name.startswith('.'):
            return None
        return self._read(self.heads_dir / branch_name)

    def branch_exists(self, branch_name: str) -> bool:
        return self.read_branch(branch_name) is not None

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.iterdir():
            if branch_file.is_file():
                branches.append((branch_file.name, self._read(branch_file)))

        return sorted(branches, key=lambda x: x[0])

    def get_current_branch(self) -> str:
        """
        Get the current branch name.

        Raises:
            NotFoundError: If HEAD is missing or malformed
        """
        content = self._read(self.head_file)
        if not content or not content.startswith('ref: refs/heads/'):
            raise NotFoundError("HEAD does not name a branch")
        return content[16:]

    def set_head(self, branch_name: str) -> None:
        """
        Point HEAD at a branch.

        Raises:
            NotFoundError: If the branch doesn't exist
        """
        if not self.branch_exists(branch_name):
            raise NotFoundError("No such branch exists.")
        self._write(self.head_file, f'ref: refs/heads/{branch_name}')
        logger.debug("HEAD -> %s", branch_name)

    def resolve_head(self) -> str:
        """
        Resolve HEAD to a commit hash.

        Raises:
            NotFoundError: If HEAD or its branch doesn't resolve
        """
        branch_name = self.get_current_branch()
        commit_hash = self.read_branch(branch_name)
        if commit_hash is None:
            raise NotFoundError(f"Branch '{branch_name}' has no commit")
        return commit_hash

    def _validate_commit(self, commit_hash: str) -> None:
        # Raises NotFoundError unless commit_hash names a stored commit
        self.repo.objects.get(commit_hash, Commit)

    def create_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Create a new branch.

        Raises:
            InvalidStateError: If the branch already exists or the name is invalid
        """
        self.validate_branch_name(branch_name)
        if self.branch_exists(branch_name):
            raise InvalidStateError("A branch with that name already exists.")
        self._validate_commit(commit_hash)
        self._write(self.heads_dir / branch_name, commit_hash)
        logger.debug("created branch %s at %s", branch_name, commit_hash)

    def update_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Point an existing or new branch at a commit.

        Raises:
            NotFoundError: If commit_hash is not a stored commit
        """
        self.validate_branch_name(branch_name)
        self._validate_commit(commit_hash)
        self._write(self.heads_dir / branch_name, commit_hash)
        logger.debug("branch %s -> %s", branch_name, commit_hash)

    def delete_branch(self, branch_name: str) -> None:
        """
        Delete a branch pointer. The commits it pointed to stay stored.

        Raises:
            NotFoundError: If the branch doesn't exist
            InvalidStateError: If it is the current branch
        """
        if not self.branch_exists(branch_name):
            raise NotFoundError("A branch with that name does not exist.")
        if self.get_current_branch() == branch_name:
            raise InvalidStateError("Cannot remove the current branch.")

        try:
            (self.heads_dir / branch_name).unlink()
        except OSError as e:
            raise FileSystemError(f"Cannot delete branch {branch_name}: {e}") from e
        logger.debug("deleted branch %s", branch_name)

    def read_staged(self) -> Optional[str]:
        """Hash of the live staging index, or None."""
        return self._read(self.staged_file)

    def write_staged(self, index_hash: str) -> None:
        self._write(self.staged_file, index_hash)
