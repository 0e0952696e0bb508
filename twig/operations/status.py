"""Working tree status for Twig."""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class StatusReport:
    """Classification of every file relative to HEAD and the staging index."""
    current_branch: str
    branches: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[Tuple[str, str]] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.removed or self.modified or self.untracked)

    def __repr__(self) -> str:
        return (f"StatusReport(branch={self.current_branch}, staged={len(self.staged)}, "
                f"removed={len(self.removed)}, modified={len(self.modified)}, "
                f"untracked={len(self.untracked)})")


def compute_status(repo) -> StatusReport:
    """
    Compare the head commit, the staging index and the working tree.

    Modifications not staged for commit are reported as (path, kind) where
    kind is 'modified' or 'deleted':
    - tracked in HEAD, changed in the working tree, not staged
    - staged for addition, but the working file differs from the staged one
    - staged for addition, but deleted from the working tree
    - tracked in HEAD and not staged for removal, but deleted

    Untracked files exist in the working tree but are neither staged for
    addition nor tracked. This includes files staged for removal and then
    re-created.

    Args:
        repo: Repository instance

    Returns:
        StatusReport
    """
    head = repo.head_commit()
    index = repo.load_index()
    working = repo.working_files()

    report = StatusReport(
        current_branch=repo.refs.get_current_branch(),
        branches=[name for name, _ in repo.refs.list_branches()],
        staged=index.staged_files(),
        removed=index.removed_files(),
    )

    modified = {}

    for path, blob_hash in head.tracked.items():
        if path in index:
            continue
        if path not in working:
            modified[path] = 'deleted'
        elif working[path] != blob_hash:
            modified[path] = 'modified'

    for path in index.staged_files():
        if path not in working:
            modified[path] = 'deleted'
        elif working[path] != index.get(path):
            modified[path] = 'modified'

    report.modified = sorted(modified.items())

    report.untracked = sorted(
        path for path in working
        if index.is_removed(path) or (not index.is_staged(path) and not head.has_file(path))
    )

    return report
