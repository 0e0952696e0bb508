"""Stored objects for Twig."""

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from .hash import hash_object


class TwigObject(ABC):
    """
    Base class for all stored objects.

    Subclasses set the ``type`` tag that is written in the object header
    and used by the object store to pick the class on read.
    """

    type: str = ''

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object payload to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Load object payload from bytes.

        Args:
            data: Serialized object data
        """
        pass

    def encode(self) -> bytes:
        """
        Encode object with its header.

        Format: <type> <size>\\0<payload>

        Returns:
            bytes: Header followed by payload
        """
        data = self.serialize()
        header = f"{self.type} {len(data)}\0".encode()
        return header + data

    def compute_hash(self) -> str:
        """
        Compute and cache object hash over the encoded form.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.encode())
        return self._hash

    @property
    def hash(self) -> str:
        """
        Get object hash.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self.compute_hash()

    def __eq__(self, other) -> bool:
        if not isinstance(other, TwigObject):
            return NotImplemented
        return self.type == other.type and self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)


class Blob(TwigObject):
    """
    Represents file content.

    A blob stores the raw content of a file without its name.
    """

    type = 'blob'

    def __init__(self, data: Optional[bytes] = None):
        """
        Initialize a blob.

        Args:
            data: File content as bytes
        """
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    @classmethod
    def conflict(cls, current: Optional[bytes], given: Optional[bytes]) -> 'Blob':
        """
        Create a blob holding both sides of a merge conflict.

        The current branch's version comes first. A side that deleted the
        file contributes nothing between its markers.

        Args:
            current: Content on the current branch, or None if deleted
            given: Content on the merged-in branch, or None if deleted

        Returns:
            Blob: Conflict blob
        """
        result = [b'<<<<<<< HEAD\n']
        if current:
            result.append(current)
            if not current.endswith(b'\n'):
                result.append(b'\n')
        result.append(b'=======\n')
        if given:
            result.append(given)
            if not given.endswith(b'\n'):
                result.append(b'\n')
        result.append(b'>>>>>>>\n')
        return cls(b''.join(result))

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class Commit(TwigObject):
    """
    Represents a snapshot of every tracked file.

    A commit captures:
    - The tracked mapping from path to blob hash
    - Parent commit(s) for history
    - Timestamp
    - Commit message

    Commits are never edited once created; derive() builds a new one.
    """

    type = 'commit'

    INITIAL_MESSAGE = 'initial commit'

    def __init__(
        self,
        message: str = '',
        timestamp: int = 0,
        timezone: str = '+0000',
        tracked: Optional[Dict[str, str]] = None,
        parents: Optional[List[str]] = None
    ):
        super().__init__()
        self.message = message
        self.timestamp = timestamp
        self.timezone = timezone
        self.tracked: Dict[str, str] = dict(tracked or {})
        self.parents: List[str] = list(parents or [])

    def serialize(self) -> bytes:
        """
        Serialize commit to text.

        Format:
        timestamp <seconds> <timezone>
        parent <parent-hash>        (zero or more)
        file <blob-hash> <path>     (sorted by path)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'timestamp {self.timestamp} {self.timezone}']

        for parent in self.parents:
            lines.append(f'parent {parent}')

        for path in sorted(self.tracked):
            lines.append(f'file {self.tracked[path]} {path}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        content = data.decode()
        lines = content.split('\n')

        self.parents = []
        self.tracked = {}

        message_start = len(lines)
        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('timestamp '):
                seconds, self.timezone = line[10:].split(' ', 1)
                self.timestamp = int(seconds)

            elif line.startswith('parent '):
                self.parents.append(line[7:])

            elif line.startswith('file '):
                blob_hash, path = line[5:].split(' ', 1)
                self.tracked[path] = blob_hash

        self.message = '\n'.join(lines[message_start:])
        self._hash = None

    @classmethod
    def create_initial(cls) -> 'Commit':
        """
        Create the root commit shared by every repository.

        Returns:
            Commit: Commit with a fixed message, epoch timestamp, no files
            and no parents
        """
        return cls(message=cls.INITIAL_MESSAGE, timestamp=0, timezone='+0000')

    def derive(
        self,
        index,
        message: str,
        second_parent: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> 'Commit':
        """
        Create a child commit with staged changes applied.

        Args:
            index: StagingIndex whose entries are folded into the tracked map
            message: Commit message
            second_parent: Hash of the merged-in commit, for merge commits
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit; this commit is left unchanged
        """
        tracked = dict(self.tracked)
        for path, blob_hash in index.changes.items():
            if blob_hash is None:
                tracked.pop(path, None)
            else:
                tracked[path] = blob_hash

        parents = [self.hash]
        if second_parent:
            parents.append(second_parent)

        if timestamp is None:
            timestamp = int(time.time())
        timezone = time.strftime('%z', time.localtime(timestamp)) or '+0000'

        return Commit(
            message=message,
            timestamp=timestamp,
            timezone=timezone,
            tracked=tracked,
            parents=parents
        )

    def get_file(self, path: str) -> Optional[str]:
        """Get blob hash tracked for path, or None."""
        return self.tracked.get(path)

    def has_file(self, path: str) -> bool:
        """Check whether path is tracked."""
        return path in self.tracked

    @property
    def is_initial(self) -> bool:
        return not self.parents

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
