"""Repository management for Twig."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from .errors import (NotFoundError, MissingFileError, InvalidStateError,
                     FileSystemError)
from .objects import Blob, Commit
from .index import StagingIndex
from .store import ObjectStore
from .history import first_parent_history

logger = logging.getLogger(__name__)

TWIG_DIR_NAME = '.twig'


class Repository:
    """
    Represents a Twig repository.

    The repository owns the .twig directory, the refs and the live staging
    index, and coordinates them to implement the user-level operations.
    Every operation is passed through a Repository instance; there is no
    module-level state.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.twig_dir = self.work_tree / TWIG_DIR_NAME
        self.objects_dir = self.twig_dir / 'objects'
        self.refs_dir = self.twig_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.twig_dir / 'HEAD'
        self.staged_file = self.twig_dir / 'STAGED'
        self.config_file = self.twig_dir / 'config'

        self.objects = ObjectStore(self.objects_dir)

        # Managers are created on first use to avoid circular imports
        self._ref_manager = None
        self._config = None
        self._checkout_engine = None
        self._merge_engine = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    @property
    def checkout(self):
        """Get CheckoutEngine instance."""
        if self._checkout_engine is None:
            from twig.operations.checkout import CheckoutEngine
            self._checkout_engine = CheckoutEngine(self)
        return self._checkout_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from twig.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .twig directory structure:
        .twig/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch
        ├── STAGED         # Hash of the live staging index
        └── config         # Repository configuration

        The repository starts with the shared initial commit on the default
        branch and an empty staging index.

        Args:
            default_branch: Name of the first branch (defaults to the
                init.defaultbranch setting)

        Returns:
            Repository: self for method chaining

        Raises:
            InvalidStateError: If repository already exists
        """
        if self.twig_dir.exists():
            raise InvalidStateError(
                "A Twig version-control system already exists in the current directory."
            )

        from .config import Config
        default_branch = default_branch or Config().get('init', 'defaultbranch')
        self.refs.validate_branch_name(default_branch)

        try:
            self.twig_dir.mkdir(parents=True)
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.heads_dir.mkdir()
            self.config_file.write_text('[core]\nrepositoryformatversion = 0\n\n')
        except OSError as e:
            raise FileSystemError(f"Cannot create repository: {e}") from e

        initial = Commit.create_initial()
        self.objects.put(initial)
        self.refs.create_branch(default_branch, initial.hash)
        self.refs.set_head(default_branch)
        self.save_index(StagingIndex())

        logger.debug("initialized repository at %s", self.twig_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / TWIG_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    # Working tree

    def canonical_path(self, path) -> str:
        """
        Convert a user path to the key used in tracked and staged maps.

        Relative paths are taken relative to the work tree. The result is
        relative to the work tree and uses forward slashes.

        Hidden paths (any component starting with '.') are rejected, since
        working_files() never sees them.

        Raises:
            InvalidStateError: If the path is outside the work tree, hidden,
                or contains a line break
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.work_tree / path
        path = path.resolve()

        try:
            rel_path = path.relative_to(self.work_tree)
        except ValueError:
            raise InvalidStateError(f"Path '{path}' is outside the repository")

        if not rel_path.parts:
            raise InvalidStateError("Path names the repository root, not a file")
        if rel_path.parts[0] == TWIG_DIR_NAME:
            raise InvalidStateError(f"Path '{rel_path.as_posix()}' is inside {TWIG_DIR_NAME}")
        if any(part.startswith('.') for part in rel_path.parts):
            raise InvalidStateError(f"Path '{rel_path.as_posix()}' is hidden and cannot be tracked")

        # Commits and indexes store one path per line
        canonical = rel_path.as_posix()
        if '\n' in canonical or '\r' in canonical:
            raise InvalidStateError(f"Path {canonical!r} contains a line break")

        return canonical

    def working_path(self, path: str) -> Path:
        """Absolute location of a canonical path."""
        return self.work_tree / path

    def working_files(self) -> Dict[str, str]:
        """
        Get all files in the working directory with their blob hashes.

        Hidden files and directories (names starting with '.') are skipped.

        Returns:
            Dict mapping canonical path to blob hash
        """
        files = {}
        for path in self.work_tree.rglob('*'):
            rel_path = path.relative_to(self.work_tree)
            if any(part.startswith('.') for part in rel_path.parts):
                continue
            if path.is_file():
                try:
                    files[rel_path.as_posix()] = Blob.from_file(path).hash
                except OSError as e:
                    raise FileSystemError(f"Cannot read {rel_path}: {e}") from e
        return files

    def write_working_file(self, path: str, data: bytes) -> None:
        file_path = self.working_path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            raise FileSystemError(f"Cannot write {path}: {e}") from e

    def delete_working_file(self, path: str) -> bool:
        """
        Delete a working file and any directories it leaves empty.

        Returns:
            True if a file was deleted
        """
        file_path = self.working_path(path)
        if not file_path.is_file():
            return False

        try:
            file_path.unlink()
            parent = file_path.parent
            while parent != self.work_tree and not any(parent.iterdir()):
                parent.rmdir()
                parent = parent.parent
        except OSError as e:
            raise FileSystemError(f"Cannot delete {path}: {e}") from e
        return True

    # Commits and refs

    def head_hash(self) -> str:
        return self.refs.resolve_head()

    def head_commit(self) -> Commit:
        return self.objects.get(self.head_hash(), Commit)

    def resolve_commit(self, ref: Optional[str] = None) -> str:
        """
        Resolve a commit reference to a full commit hash.

        Accepts HEAD, a branch name, or a full or abbreviated commit hash.

        Raises:
            NotFoundError: If no commit matches
            AmbiguousReferenceError: If an abbreviation matches several objects
        """
        if not ref or ref == 'HEAD':
            return self.head_hash()

        branch_hash = self.refs.read_branch(ref)
        if branch_hash is not None:
            return branch_hash

        try:
            commit_hash = self.objects.resolve_abbreviation(ref)
        except NotFoundError:
            raise NotFoundError("No commit with that id exists.")

        if self.objects.read_type(commit_hash) != Commit.type:
            raise NotFoundError("No commit with that id exists.")
        return commit_hash

    # Staging index

    def load_index(self) -> StagingIndex:
        """Read the live staging index."""
        index_hash = self.refs.read_staged()
        if index_hash is None:
            return StagingIndex()
        return self.objects.get(index_hash, StagingIndex)

    def save_index(self, index: StagingIndex) -> str:
        """
        Store the staging index and make it the live one.

        With core.autocompact enabled the previous index object is deleted.

        Returns:
            str: Hash of the stored index
        """
        previous = self.refs.read_staged()
        index_hash = self.objects.put(index)
        self.refs.write_staged(index_hash)

        if previous and previous != index_hash and self.config.get_bool('core', 'autocompact', True):
            self.objects.delete(previous)

        return index_hash

    def clear_index(self) -> str:
        return self.save_index(StagingIndex())

    def compact(self) -> int:
        """
        Delete every stored staging index except the live one.

        Returns:
            Number of objects deleted
        """
        live = self.refs.read_staged()
        removed = 0
        for obj_hash in self.objects.list_hashes():
            if obj_hash != live and self.objects.read_type(obj_hash) == StagingIndex.type:
                self.objects.delete(obj_hash)
                removed += 1
        logger.debug("compaction removed %d index object(s)", removed)
        return removed

    # Operations

    def add(self, path) -> Optional[str]:
        """
        Stage the current version of a file.

        Returns:
            Hash of the staged blob, or None if the file matches the
            current commit and nothing is staged

        Raises:
            MissingFileError: If the file does not exist
        """
        rel_path = self.canonical_path(path)
        file_path = self.working_path(rel_path)
        if not file_path.is_file():
            raise MissingFileError("File does not exist.")

        index = self.load_index()
        blob_hash = index.add(self.objects, self.head_commit(), rel_path, file_path)
        self.save_index(index)
        return blob_hash

    def remove(self, path) -> str:
        """
        Unstage a file, or stage a tracked file for removal.

        A file staged for addition is only unstaged. Otherwise, if the
        current commit tracks it, a removal is staged and the working file
        is deleted.

        Returns:
            'unstaged' or 'removed'

        Raises:
            InvalidStateError: If the file is neither staged nor tracked
        """
        rel_path = self.canonical_path(path)
        index = self.load_index()

        if index.remove_staged(rel_path):
            self.save_index(index)
            return 'unstaged'

        if not self.head_commit().has_file(rel_path):
            raise InvalidStateError("No reason to remove the file.")

        index.stage_for_removal(rel_path)
        self.save_index(index)
        self.delete_working_file(rel_path)
        return 'removed'

    def commit(self, message: str) -> str:
        """
        Create a commit from the staged changes.

        Returns:
            str: Hash of the new commit

        Raises:
            InvalidStateError: If nothing is staged or the message is blank
        """
        index = self.load_index()
        if index.is_empty():
            raise InvalidStateError("No changes added to the commit.")
        if not message or not message.strip():
            raise InvalidStateError("Please enter a commit message.")

        branch = self.refs.get_current_branch()
        commit = self.head_commit().derive(index, message)
        commit_hash = self.objects.put(commit)
        self.refs.update_branch(branch, commit_hash)
        self.clear_index()

        logger.debug("committed %s on %s", commit_hash, branch)
        return commit_hash

    def log(self) -> List[Tuple[str, Commit]]:
        """History from HEAD to the initial commit along first parents."""
        return first_parent_history(self.objects, self.head_hash())

    def commits(self) -> List[Tuple[str, Commit]]:
        """
        Every stored commit, reachable or not.

        Returns:
            List of (commit_hash, commit) tuples, newest first
        """
        result = []
        for obj_hash in self.objects.list_hashes():
            if self.objects.read_type(obj_hash) == Commit.type:
                result.append((obj_hash, self.objects.get(obj_hash, Commit)))
        result.sort(key=lambda x: (x[1].timestamp, x[0]), reverse=True)
        return result

    def global_log(self) -> List[Tuple[str, Commit]]:
        return self.commits()

    def find(self, message: str) -> List[str]:
        """Hashes of all commits whose message is exactly message."""
        return sorted(h for h, commit in self.commits() if commit.message == message)

    def branch(self, name: str) -> str:
        """
        Create a branch at the current commit.

        Returns:
            str: Commit hash the branch points to
        """
        commit_hash = self.head_hash()
        self.refs.create_branch(name, commit_hash)
        return commit_hash

    def remove_branch(self, name: str) -> None:
        self.refs.delete_branch(name)

    def status(self):
        from twig.operations.status import compute_status
        return compute_status(self)

    def checkout_branch(self, name: str) -> None:
        self.checkout.checkout_branch(name)

    def checkout_file(self, path, commit_ref: Optional[str] = None) -> None:
        self.checkout.checkout_file(path, commit_ref)

    def reset(self, commit_ref: str) -> str:
        return self.checkout.reset(commit_ref)

    def merge_branch(self, branch_name: str):
        return self.merge.merge(branch_name)

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
