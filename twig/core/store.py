"""Content-addressed object storage for Twig."""

import logging
import zlib
from pathlib import Path
from typing import Dict, Optional, Set, Type
from .errors import (NotFoundError, AmbiguousReferenceError, FileSystemError,
                     ObjectFormatError)
from .hash import DIGEST_LENGTH, is_hex
from .objects import TwigObject, Blob, Commit
from .index import StagingIndex

logger = logging.getLogger(__name__)

OBJECT_TYPES: Dict[str, Type[TwigObject]] = {
    Blob.type: Blob,
    Commit.type: Commit,
    StagingIndex.type: StagingIndex,
}


class ObjectStore:
    """
    Stores immutable objects keyed by their hash.

    Objects live under the objects directory in subdirectories named by
    the first 2 characters of the hash, with the remaining 38 characters
    as the filename. Files hold the zlib-compressed encoded object.
    """

    def __init__(self, objects_dir):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the objects
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / hash[:2] / hash[2:]

    def put(self, obj: TwigObject) -> str:
        """
        Write object to the store.

        Writing an object that is already stored is a no-op.

        Args:
            obj: Object to write

        Returns:
            str: SHA-1 hash of the object
        """
        hash = obj.hash
        path = self.object_path(hash)

        if path.exists():
            return hash

        compressed = zlib.compress(obj.encode())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(compressed)
        except OSError as e:
            raise FileSystemError(f"Cannot write object {hash}: {e}") from e

        logger.debug("stored %s %s", obj.type, hash)
        return hash

    def _read(self, hash: str) -> bytes:
        path = self.object_path(hash)

        if len(hash) != DIGEST_LENGTH or not path.is_file():
            raise NotFoundError(f"Object {hash} not found")

        try:
            return zlib.decompress(path.read_bytes())
        except OSError as e:
            raise FileSystemError(f"Cannot read object {hash}: {e}") from e
        except zlib.error as e:
            raise ObjectFormatError(f"Corrupt object {hash}: {e}") from e

    @staticmethod
    def _split_header(hash: str, content: bytes):
        try:
            null_idx = content.index(b'\0')
            obj_type, size_str = content[:null_idx].decode().split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise ObjectFormatError(f"Invalid object header in {hash}")

        data = content[null_idx + 1:]
        if len(data) != size:
            raise ObjectFormatError(
                f"Object size mismatch in {hash}: expected {size}, got {len(data)}"
            )
        return obj_type, data

    def get(self, hash: str, expected_type: Optional[Type[TwigObject]] = None) -> TwigObject:
        """
        Read object from the store.

        Args:
            hash: 40-character SHA-1 hash
            expected_type: Object class the caller requires

        Returns:
            TwigObject: Deserialized Blob, Commit or StagingIndex

        Raises:
            NotFoundError: If the object is missing or not of expected_type
            ObjectFormatError: If the object cannot be decoded
        """
        obj_type, data = self._split_header(hash, self._read(hash))

        cls = OBJECT_TYPES.get(obj_type)
        if cls is None:
            raise ObjectFormatError(f"Unknown object type: {obj_type}")

        if expected_type is not None and cls is not expected_type:
            raise NotFoundError(f"Object {hash} is not a {expected_type.type}")

        obj = cls()
        obj.deserialize(data)
        return obj

    def read_type(self, hash: str) -> str:
        """Return the type tag of a stored object."""
        obj_type, _ = self._split_header(hash, self._read(hash))
        return obj_type

    def exists(self, hash: str) -> bool:
        """
        Check if object exists in the store.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            bool: True if object exists
        """
        return len(hash) == DIGEST_LENGTH and self.object_path(hash).is_file()

    def list_hashes(self) -> Set[str]:
        """Return the hashes of all stored objects."""
        hashes = set()
        if not self.objects_dir.exists():
            return hashes

        for subdir in self.objects_dir.iterdir():
            if subdir.is_dir() and len(subdir.name) == 2:
                for obj_file in subdir.iterdir():
                    hashes.add(subdir.name + obj_file.name)
        return hashes

    def resolve_abbreviation(self, prefix: str) -> str:
        """
        Find the single object whose hash starts with prefix.

        Args:
            prefix: Abbreviated or full hash

        Returns:
            str: Full 40-character hash

        Raises:
            NotFoundError: If nothing matches
            AmbiguousReferenceError: If more than one object matches
        """
        prefix = prefix.lower()
        if not is_hex(prefix) or len(prefix) > DIGEST_LENGTH:
            raise NotFoundError(f"No object matches '{prefix}'")

        if len(prefix) == DIGEST_LENGTH:
            if self.exists(prefix):
                return prefix
            raise NotFoundError(f"No object matches '{prefix}'")

        matches = sorted(h for h in self.list_hashes() if h.startswith(prefix))

        if not matches:
            raise NotFoundError(f"No object matches '{prefix}'")
        if len(matches) > 1:
            raise AmbiguousReferenceError(
                f"Ambiguous reference '{prefix}' matches {len(matches)} objects"
            )
        return matches[0]

    def delete(self, hash: str) -> bool:
        """
        Remove an object file.

        Only staging index objects are ever deleted; blobs and commits stay.

        Returns:
            True if the object was removed
        """
        path = self.object_path(hash)
        if not path.is_file():
            return False

        try:
            path.unlink()
            if not any(path.parent.iterdir()):
                path.parent.rmdir()
        except OSError as e:
            raise FileSystemError(f"Cannot delete object {hash}: {e}") from e

        logger.debug("deleted %s", hash)
        return True

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
