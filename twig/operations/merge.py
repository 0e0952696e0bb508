"""Merge operations for Twig."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from twig.core.errors import NotFoundError, InvalidStateError
from twig.core.history import lowest_common_ancestor
from twig.core.index import StagingIndex
from twig.core.objects import Blob, Commit

logger = logging.getLogger(__name__)

UP_TO_DATE = 'up-to-date'
FAST_FORWARD = 'fast-forward'
MERGED = 'merged'


@dataclass
class MergeConflict:
    """A path changed differently on both sides since the merge base."""
    path: str
    ours_hash: Optional[str]
    theirs_hash: Optional[str]
    conflict_hash: str

    def __repr__(self) -> str:
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Result of a merge operation."""
    status: str
    base_hash: str
    target_hash: str
    commit_hash: Optional[str] = None
    conflicts: List[MergeConflict] = field(default_factory=list)

    @property
    def is_fast_forward(self) -> bool:
        return self.status == FAST_FORWARD

    @property
    def is_up_to_date(self) -> bool:
        return self.status == UP_TO_DATE

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def __repr__(self) -> str:
        return f"MergeResult({self.status}, conflicts={len(self.conflicts)})"


class MergeEngine:
    """
    Merges another branch into the current branch.

    Supports:
    - Merge base finding (lowest common ancestor)
    - Fast-forward merges
    - Three-way merges with conflict markers

    A merge either stops before changing anything, or completes with a
    merge commit. Conflicts do not abort a merge; the conflicted content is
    committed and reported on the result.
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def find_merge_base(self, commit1_hash: str, commit2_hash: str) -> str:
        return lowest_common_ancestor(self.repo.objects, commit1_hash, commit2_hash)

    def _blob_data(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if blob_hash is None:
            return None
        return self.repo.objects.get(blob_hash, Blob).data

    def merge(self, branch_name: str) -> MergeResult:
        """
        Merge a branch into the current branch.

        Args:
            branch_name: Name of branch to merge

        Returns:
            MergeResult with status and any conflicts

        Raises:
            InvalidStateError: If changes are staged, the branch is the
                current one, or an untracked file would be overwritten
            NotFoundError: If the branch doesn't exist
        """
        refs = self.repo.refs

        if not self.repo.load_index().is_empty():
            raise InvalidStateError("You have uncommitted changes.")

        target_hash = refs.read_branch(branch_name)
        if target_hash is None:
            raise NotFoundError("A branch with that name does not exist.")

        current_branch = refs.get_current_branch()
        if current_branch == branch_name:
            raise InvalidStateError("Cannot merge a branch with itself.")

        current_hash = refs.resolve_head()
        base_hash = self.find_merge_base(current_hash, target_hash)
        logger.debug("merge base of %s and %s is %s", current_hash, target_hash, base_hash)

        if base_hash == target_hash:
            return MergeResult(status=UP_TO_DATE, base_hash=base_hash, target_hash=target_hash)

        if base_hash == current_hash:
            self.repo.checkout.fast_forward(target_hash)
            return MergeResult(
                status=FAST_FORWARD,
                base_hash=base_hash,
                target_hash=target_hash,
                commit_hash=target_hash
            )

        return self.three_way_merge(base_hash, current_hash, target_hash, branch_name)

    def three_way_merge(
        self,
        base_hash: str,
        ours_hash: str,
        theirs_hash: str,
        branch_name: str
    ) -> MergeResult:
        """
        Merge theirs into ours based on their common ancestor base.

        For every path touched since base:
        - changed only in theirs: their version is written and staged
        - changed only in ours: kept
        - changed identically in both: kept
        - changed differently (including modify against delete): a conflict
          blob holding both versions is written and staged

        Args:
            base_hash: Common ancestor commit hash
            ours_hash: Current commit hash
            theirs_hash: Commit hash to merge in
            branch_name: Name of the branch being merged in

        Returns:
            MergeResult for the new merge commit
        """
        objects = self.repo.objects
        base = objects.get(base_hash, Commit)
        ours = objects.get(ours_hash, Commit)
        theirs = objects.get(theirs_hash, Commit)

        mine = StagingIndex.delta(base, ours)
        other = StagingIndex.delta(base, theirs)

        apply_theirs = []
        conflicted = []
        for path in sorted(set(mine.changes) | set(other.changes)):
            if path not in other:
                continue
            if path not in mine:
                apply_theirs.append(path)
            elif mine.get(path) != other.get(path):
                conflicted.append(path)

        # Check before writing anything so a refused merge changes nothing
        self.repo.checkout.ensure_nothing_in_the_way(ours, apply_theirs + conflicted)

        index = StagingIndex()
        for path in apply_theirs:
            blob_hash = other.get(path)
            if blob_hash is None:
                self.repo.delete_working_file(path)
                index.stage_for_removal(path)
            else:
                self.repo.checkout.write_blob(path, blob_hash)
                index.record(path, blob_hash)

        conflicts = []
        for path in conflicted:
            blob = Blob.conflict(self._blob_data(mine.get(path)), self._blob_data(other.get(path)))
            objects.put(blob)
            self.repo.write_working_file(path, blob.data)
            index.record(path, blob.hash)
            conflicts.append(MergeConflict(
                path=path,
                ours_hash=mine.get(path),
                theirs_hash=other.get(path),
                conflict_hash=blob.hash
            ))
            logger.debug("conflict in %s", path)

        current_branch = self.repo.refs.get_current_branch()
        message = f"Merged {branch_name} into {current_branch}."
        commit = ours.derive(index, message, second_parent=theirs_hash)
        commit_hash = objects.put(commit)
        self.repo.refs.update_branch(current_branch, commit_hash)
        self.repo.clear_index()

        return MergeResult(
            status=MERGED,
            base_hash=base_hash,
            target_hash=theirs_hash,
            commit_hash=commit_hash,
            conflicts=conflicts
        )
