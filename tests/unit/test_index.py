"""Unit tests for the staging index."""

import pytest
from twig.core.errors import MissingFileError
from twig.core.index import StagingIndex
from twig.core.objects import Blob, Commit
from twig.core.store import ObjectStore


@pytest.fixture
def store(tmp_path):
    return ObjectStore(tmp_path / 'objects')


@pytest.fixture
def current():
    return Commit('current', 1, '+0000', {'tracked.txt': Blob(b'tracked\n').hash})


def test_empty_index():
    index = StagingIndex()
    assert index.is_empty()
    assert len(index) == 0
    assert index.staged_files() == []
    assert index.removed_files() == []


def test_add_stages_new_file(tmp_path, store, current):
    path = tmp_path / 'new.txt'
    path.write_bytes(b'new\n')
    index = StagingIndex()

    blob_hash = index.add(store, current, 'new.txt', path)

    assert blob_hash == Blob(b'new\n').hash
    assert index.get('new.txt') == blob_hash
    assert index.is_staged('new.txt')
    assert store.exists(blob_hash)


def test_add_unchanged_file_drops_entry(tmp_path, store, current):
    path = tmp_path / 'tracked.txt'
    path.write_bytes(b'tracked\n')
    index = StagingIndex({'tracked.txt': None})

    assert index.add(store, current, 'tracked.txt', path) is None
    assert 'tracked.txt' not in index
    assert not store.exists(Blob(b'tracked\n').hash)


def test_add_missing_file(tmp_path, store, current):
    with pytest.raises(MissingFileError):
        StagingIndex().add(store, current, 'gone.txt', tmp_path / 'gone.txt')


def test_remove_staged():
    index = StagingIndex({'a': 'a' * 40, 'b': None})
    assert index.remove_staged('a')
    assert 'a' not in index
    # A pending removal is not an addition
    assert not index.remove_staged('b')
    assert index.is_removed('b')
    assert not index.remove_staged('missing')


def test_stage_for_removal():
    index = StagingIndex({'a': 'a' * 40})
    index.stage_for_removal('a')
    assert index.is_removed('a')
    assert not index.is_staged('a')
    assert index.removed_files() == ['a']


def test_staged_and_removed_files_sorted():
    index = StagingIndex({'z': 'z' * 40, 'a': 'a' * 40, 'm': None, 'b': None})
    assert index.staged_files() == ['a', 'z']
    assert index.removed_files() == ['b', 'm']


def test_clear():
    index = StagingIndex({'a': 'a' * 40})
    index.clear()
    assert index.is_empty()
    assert index.hash == StagingIndex().hash


def test_hash_follows_changes():
    """Test the cached hash is dropped when entries change."""
    index = StagingIndex()
    before = index.hash
    index.record('a', 'a' * 40)
    assert index.hash != before
    assert index.hash == StagingIndex({'a': 'a' * 40}).hash


def test_roundtrip_keeps_tombstones():
    index = StagingIndex({'dir/file name.txt': 'a' * 40, 'gone': None})
    loaded = StagingIndex()
    loaded.deserialize(index.serialize())
    assert loaded.changes == index.changes
    assert loaded.hash == index.hash


def test_delta():
    """Test delta lists additions, modifications and removals."""
    base = Commit('base', 1, '+0000', {'same': 's' * 40, 'edit': 'e' * 40, 'gone': 'g' * 40})
    derived = Commit('derived', 2, '+0000', {'same': 's' * 40, 'edit': 'f' * 40, 'new': 'n' * 40})

    delta = StagingIndex.delta(base, derived)

    assert delta.changes == {'edit': 'f' * 40, 'new': 'n' * 40, 'gone': None}


def test_delta_of_identical_commits_is_empty():
    commit = Commit('c', 1, '+0000', {'a': 'a' * 40})
    assert StagingIndex.delta(commit, commit).is_empty()


def test_derive_of_delta_reproduces_tracked_map():
    """Test applying delta(base, derived) to base gives derived's files."""
    base = Commit('base', 1, '+0000', {'a': 'a' * 40, 'b': 'b' * 40})
    derived = Commit('derived', 2, '+0000', {'b': 'c' * 40, 'd': 'd' * 40})

    rebuilt = base.derive(StagingIndex.delta(base, derived), 'rebuilt', timestamp=3)
    assert rebuilt.tracked == derived.tracked
