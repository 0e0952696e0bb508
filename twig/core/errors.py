"""Exceptions raised by the Twig core.

Every failure of a repository operation is reported as a TwigError subclass
carrying the message shown to the user. Operations raise before touching any
ref, so a failed operation never leaves a partially moved branch behind.

Merge conflicts are not errors; they are reported on MergeResult.
"""


class TwigError(Exception):
    """Base class for all Twig errors."""


class NotFoundError(TwigError):
    """A ref, branch, object, commit or file does not resolve."""


class MissingFileError(NotFoundError):
    """A working-tree file named by the caller does not exist."""


class AmbiguousReferenceError(TwigError):
    """An abbreviated digest matches more than one object."""


class InvalidStateError(TwigError):
    """The repository is not in a state that allows the operation."""


class FileSystemError(TwigError):
    """An underlying read or write on disk failed."""


class ObjectFormatError(TwigError):
    """A stored object could not be decoded."""


class InvariantError(TwigError):
    """An internal invariant of the commit graph was violated."""
