"""Commit graph traversal: ancestors, merge base and log walks."""

import logging
from typing import List, Set, Tuple
from .errors import InvariantError
from .objects import Commit

logger = logging.getLogger(__name__)


def ancestors(store, commit_hash: str) -> Set[str]:
    """
    Get all ancestors of a commit.

    Follows every parent link, visiting each commit once, so merge commits
    with shared history are not walked repeatedly.

    Args:
        store: ObjectStore holding the commits
        commit_hash: Starting commit hash

    Returns:
        Set of ancestor commit hashes (including the commit itself)
    """
    visited = set()
    to_visit = [commit_hash]

    while to_visit:
        current = to_visit.pop()

        if current in visited:
            continue
        visited.add(current)

        commit = store.get(current, Commit)
        for parent in commit.parents:
            if parent not in visited:
                to_visit.append(parent)

    return visited


def is_ancestor(store, ancestor_hash: str, commit_hash: str) -> bool:
    """Check whether ancestor_hash is reachable from commit_hash."""
    return ancestor_hash in ancestors(store, commit_hash)


def lowest_common_ancestor(store, hash1: str, hash2: str) -> str:
    """
    Find the merge base of two commits.

    Takes the common ancestors and discards every one that is a proper
    ancestor of another common ancestor. Histories built by Twig leave a
    single candidate; for criss-cross histories the most recent candidate
    wins, ties broken by hash.

    Args:
        store: ObjectStore holding the commits
        hash1: First commit hash
        hash2: Second commit hash

    Returns:
        Hash of the lowest common ancestor

    Raises:
        InvariantError: If the commits share no ancestor
    """
    if hash1 == hash2:
        return hash1

    common = ancestors(store, hash1) & ancestors(store, hash2)
    if not common:
        raise InvariantError(f"Commits {hash1[:7]} and {hash2[:7]} share no root")

    candidates = set(common)
    for member in common:
        if member not in candidates:
            continue
        candidates -= ancestors(store, member) - {member}

    if len(candidates) > 1:
        logger.debug("several merge base candidates: %s", sorted(candidates))

    return max(
        candidates,
        key=lambda h: (store.get(h, Commit).timestamp, h)
    )


def first_parent_history(store, start_hash: str) -> List[Tuple[str, Commit]]:
    """
    Walk history from a commit back to the root along first parents.

    Args:
        store: ObjectStore holding the commits
        start_hash: Commit to start from

    Returns:
        List of (commit_hash, commit) tuples, newest first
    """
    history = []
    commit_hash = start_hash

    while commit_hash:
        commit = store.get(commit_hash, Commit)
        history.append((commit_hash, commit))
        commit_hash = commit.parents[0] if commit.parents else None

    return history
