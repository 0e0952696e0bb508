"""Twig - A tiny content-addressed version control system."""

__version__ = '0.1.0'

from twig.core.repository import Repository
from twig.core.objects import TwigObject, Blob, Commit
from twig.core.index import StagingIndex

__all__ = [
    'Repository',
    'TwigObject',
    'Blob',
    'Commit',
    'StagingIndex',
]
