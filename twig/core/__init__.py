"""Core functionality for Twig.

This module contains the core data structures:
- Twig objects (Blob, Commit, StagingIndex)
- The content-addressed object store
- Commit history queries
- Repository management
- Reference management
- Configuration management
- Hashing utilities

For checkout, status and merge, see twig.operations
"""

from twig.core.objects import TwigObject, Blob, Commit
from twig.core.index import StagingIndex
from twig.core.store import ObjectStore
from twig.core.repository import Repository
from twig.core.hash import hash_object
from twig.core.refs import RefManager
from twig.core.config import Config, get_config

__all__ = [
    'TwigObject',
    'Blob',
    'Commit',
    'StagingIndex',
    'ObjectStore',
    'Repository',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
]
