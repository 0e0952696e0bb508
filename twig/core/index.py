"""Staging index implementation."""

import logging
from pathlib import Path
from typing import Dict, List, Optional
from .errors import MissingFileError
from .objects import TwigObject, Blob, Commit

logger = logging.getLogger(__name__)


class StagingIndex(TwigObject):
    """
    Pending changes relative to the current commit.

    Maps a file path to the hash of the blob staged for it, or to None
    (a tombstone) when the file is staged for removal. A missing key means
    nothing is staged for that path.

    The live index is stored like any other object after each change and
    the STAGED ref is pointed at it. The same type doubles as the result of
    delta(), the diff between two commits.
    """

    type = 'index'

    def __init__(self, changes: Optional[Dict[str, Optional[str]]] = None):
        super().__init__()
        self.changes: Dict[str, Optional[str]] = dict(changes or {})

    def serialize(self) -> bytes:
        """
        Serialize index to text.

        Format, one line per path sorted by path:
        add <blob-hash> <path>
        remove <path>

        Returns:
            bytes: Serialized index data
        """
        lines = []
        for path in sorted(self.changes):
            blob_hash = self.changes[path]
            if blob_hash is None:
                lines.append(f'remove {path}')
            else:
                lines.append(f'add {blob_hash} {path}')
        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        self.changes = {}
        for line in data.decode().split('\n'):
            if line.startswith('add '):
                blob_hash, path = line[4:].split(' ', 1)
                self.changes[path] = blob_hash
            elif line.startswith('remove '):
                self.changes[line[7:]] = None
        self._hash = None

    def add(self, store, current: Commit, path: str, filepath) -> Optional[str]:
        """
        Stage the working version of a file.

        If the file is identical to the version tracked by the current
        commit, any entry for it is dropped instead (including a pending
        removal).

        Args:
            store: ObjectStore receiving the new blob
            current: Current commit
            path: Canonical path of the file
            filepath: Location of the file on disk

        Returns:
            Hash of the staged blob, or None if nothing was staged

        Raises:
            MissingFileError: If the file does not exist
        """
        filepath = Path(filepath)
        if not filepath.is_file():
            raise MissingFileError("File does not exist.")

        blob = Blob.from_file(filepath)

        if blob.hash == current.get_file(path):
            self.changes.pop(path, None)
            self._hash = None
            logger.debug("%s matches current commit, nothing staged", path)
            return None

        store.put(blob)
        self.record(path, blob.hash)
        return blob.hash

    def record(self, path: str, blob_hash: str) -> None:
        """Stage an already stored blob for path."""
        self.changes[path] = blob_hash
        self._hash = None

    def remove_staged(self, path: str) -> bool:
        """
        Unstage a file staged for addition.

        Args:
            path: Canonical path

        Returns:
            True if an addition was unstaged, False otherwise
        """
        if self.changes.get(path) is not None:
            del self.changes[path]
            self._hash = None
            return True
        return False

    def stage_for_removal(self, path: str) -> None:
        """Record a tombstone for path."""
        self.changes[path] = None
        self._hash = None

    def clear(self) -> None:
        self.changes.clear()
        self._hash = None

    def is_empty(self) -> bool:
        return not self.changes

    def is_staged(self, path: str) -> bool:
        """True if some version of path is staged for addition."""
        return self.changes.get(path) is not None

    def is_removed(self, path: str) -> bool:
        """True if path is staged for removal."""
        return path in self.changes and self.changes[path] is None

    def get(self, path: str) -> Optional[str]:
        return self.changes.get(path)

    def staged_files(self) -> List[str]:
        """Paths staged for addition, sorted."""
        return sorted(p for p, h in self.changes.items() if h is not None)

    def removed_files(self) -> List[str]:
        """Paths staged for removal, sorted."""
        return sorted(p for p, h in self.changes.items() if h is None)

    @classmethod
    def delta(cls, base: Commit, derived: Commit) -> 'StagingIndex':
        """
        Compute the changes that turn base into derived.

        Args:
            base: Base commit
            derived: Derived commit

        Returns:
            StagingIndex: Added or modified paths map to derived's blob
            hash, paths derived no longer tracks map to None
        """
        result = cls()

        for path, blob_hash in derived.tracked.items():
            if base.get_file(path) != blob_hash:
                result.changes[path] = blob_hash

        for path in base.tracked:
            if not derived.has_file(path):
                result.changes[path] = None

        return result

    def __len__(self) -> int:
        return len(self.changes)

    def __contains__(self, path: str) -> bool:
        return path in self.changes

    def __repr__(self) -> str:
        return f"StagingIndex(entries={len(self.changes)})"
