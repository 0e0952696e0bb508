"""Unit tests for merge operations."""

import pytest
from twig.core.errors import NotFoundError, InvalidStateError
from twig.core.objects import Commit
from twig.operations.merge import MergeEngine, MergeResult, MERGED, FAST_FORWARD, UP_TO_DATE


def content(repo, name):
    return (repo.work_tree / name).read_text()


def test_merge_engine_init(repo):
    engine = MergeEngine(repo)
    assert engine.repo == repo


def test_find_merge_base(repo, diverged):
    assert repo.merge.find_merge_base(diverged['master'], diverged['feature']) == diverged['base']


def test_merge_with_staged_changes(repo, diverged, write_file):
    write_file('pending.txt', 'p')
    repo.add('pending.txt')
    with pytest.raises(InvalidStateError, match="You have uncommitted changes."):
        repo.merge_branch('feature')


def test_merge_missing_branch(repo):
    with pytest.raises(NotFoundError, match="A branch with that name does not exist."):
        repo.merge_branch('nope')


def test_merge_with_itself(repo):
    with pytest.raises(InvalidStateError, match="Cannot merge a branch with itself."):
        repo.merge_branch('master')


def test_merge_ancestor_is_up_to_date(repo, commit_file):
    repo.branch('old')
    head = commit_file('a.txt', 'a')

    result = repo.merge_branch('old')

    assert result.status == UP_TO_DATE
    assert result.is_up_to_date
    assert repo.head_hash() == head


def test_merge_fast_forward(repo, commit_file):
    repo.branch('feature')
    repo.checkout_branch('feature')
    tip = commit_file('a.txt', 'feature work\n')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')

    assert result.status == FAST_FORWARD
    assert result.is_fast_forward
    assert result.commit_hash == tip
    assert repo.head_hash() == tip
    assert repo.refs.get_current_branch() == 'master'
    assert content(repo, 'a.txt') == 'feature work\n'


def test_clean_three_way_merge(repo, diverged):
    result = repo.merge_branch('feature')

    assert result.status == MERGED
    assert not result.has_conflicts
    assert result.base_hash == diverged['base']

    merge_commit = repo.objects.get(result.commit_hash, Commit)
    assert merge_commit.parents == [diverged['master'], diverged['feature']]
    assert merge_commit.message == 'Merged feature into master.'
    assert set(merge_commit.tracked) == {'shared.txt', 'master.txt', 'feature.txt'}

    assert repo.head_hash() == result.commit_hash
    assert content(repo, 'feature.txt') == 'feature\n'
    assert content(repo, 'master.txt') == 'master\n'
    assert repo.load_index().is_empty()


def test_merge_applies_their_removal(repo, commit_file):
    commit_file('doomed.txt', 'x', 'Add doomed')
    repo.branch('feature')
    commit_file('ours.txt', 'ours', 'Ours')

    repo.checkout_branch('feature')
    repo.remove('doomed.txt')
    repo.commit('Remove doomed')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')

    assert not repo.head_commit().has_file('doomed.txt')
    assert not (repo.work_tree / 'doomed.txt').exists()
    assert not result.has_conflicts


def test_merge_keeps_our_changes(repo, commit_file):
    commit_file('a.txt', 'base\n', 'Base')
    repo.branch('feature')
    commit_file('a.txt', 'ours\n', 'Ours')

    repo.checkout_branch('feature')
    commit_file('b.txt', 'theirs\n', 'Theirs')
    repo.checkout_branch('master')

    repo.merge_branch('feature')
    assert content(repo, 'a.txt') == 'ours\n'
    assert content(repo, 'b.txt') == 'theirs\n'


def test_merge_same_change_on_both_sides(repo, commit_file):
    commit_file('a.txt', 'base\n', 'Base')
    repo.branch('feature')
    commit_file('a.txt', 'agreed\n', 'Agree on master')
    commit_file('m.txt', 'm', 'Master only')

    repo.checkout_branch('feature')
    commit_file('a.txt', 'agreed\n', 'Agree on feature')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')
    assert not result.has_conflicts
    assert content(repo, 'a.txt') == 'agreed\n'


def test_merge_same_removal_on_both_sides(repo, commit_file):
    """Test a file removed on both branches merges without a conflict."""
    commit_file('a.txt', 'base\n', 'Base')
    repo.branch('feature')
    repo.remove('a.txt')
    repo.commit('Remove a on master')
    commit_file('m.txt', 'm', 'Master only')

    repo.checkout_branch('feature')
    repo.remove('a.txt')
    repo.commit('Remove a on feature')
    commit_file('f.txt', 'f', 'Feature only')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')

    assert result.status == MERGED
    assert not result.has_conflicts
    assert not (repo.work_tree / 'a.txt').exists()
    merge_commit = repo.objects.get(result.commit_hash, Commit)
    assert 'a.txt' not in merge_commit.tracked
    assert set(merge_commit.tracked) == {'m.txt', 'f.txt'}


def test_merge_conflict(repo, commit_file):
    """Test both sides changing a file differently commits conflict markers."""
    commit_file('a.txt', 'base\n', 'Base')
    repo.branch('feature')
    commit_file('a.txt', 'ours\n', 'Ours')

    repo.checkout_branch('feature')
    commit_file('a.txt', 'theirs\n', 'Theirs')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')

    assert result.status == MERGED
    assert result.has_conflicts
    assert [c.path for c in result.conflicts] == ['a.txt']

    expected = '<<<<<<< HEAD\nours\n=======\ntheirs\n>>>>>>>\n'
    assert content(repo, 'a.txt') == expected

    conflict = result.conflicts[0]
    assert repo.head_commit().get_file('a.txt') == conflict.conflict_hash
    assert repo.head_commit().is_merge


def test_merge_conflict_modify_against_delete(repo, commit_file):
    commit_file('a.txt', 'base\n', 'Base')
    repo.branch('feature')
    repo.remove('a.txt')
    repo.commit('Delete on master')

    repo.checkout_branch('feature')
    commit_file('a.txt', 'theirs\n', 'Modify on feature')
    repo.checkout_branch('master')

    result = repo.merge_branch('feature')

    assert result.has_conflicts
    assert result.conflicts[0].ours_hash is None
    assert content(repo, 'a.txt') == '<<<<<<< HEAD\n=======\ntheirs\n>>>>>>>\n'


def test_merge_untracked_in_the_way(repo, diverged, write_file):
    """Test a refused merge leaves everything as it was."""
    write_file('feature.txt', 'local untracked copy')
    head = repo.head_hash()

    with pytest.raises(InvalidStateError, match="untracked file in the way"):
        repo.merge_branch('feature')

    assert repo.head_hash() == head
    assert content(repo, 'feature.txt') == 'local untracked copy'
    assert repo.load_index().is_empty()


def test_merge_converges(repo, diverged):
    """Test merging the same branch twice does nothing the second time."""
    first = repo.merge_branch('feature')
    second = repo.merge_branch('feature')

    assert first.status == MERGED
    assert second.status == UP_TO_DATE
    assert repo.head_hash() == first.commit_hash


def test_merge_base_moves_after_merge(repo, diverged, commit_file):
    merged = repo.merge_branch('feature')

    repo.checkout_branch('feature')
    later = commit_file('feature.txt', 'feature v2\n', 'Feature again')
    repo.checkout_branch('master')

    assert repo.merge.find_merge_base(merged.commit_hash, later) == diverged['feature']

    result = repo.merge_branch('feature')
    assert not result.has_conflicts
    assert content(repo, 'feature.txt') == 'feature v2\n'


def test_merge_result_repr():
    result = MergeResult(status=MERGED, base_hash='a' * 40, target_hash='b' * 40)
    assert 'merged' in repr(result)
    assert not result.has_conflicts
