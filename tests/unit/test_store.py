"""Unit tests for the object store."""

import zlib
import pytest
from twig.core.errors import NotFoundError, AmbiguousReferenceError, ObjectFormatError
from twig.core.index import StagingIndex
from twig.core.objects import Blob, Commit
from twig.core.store import ObjectStore


@pytest.fixture
def store(tmp_path):
    return ObjectStore(tmp_path / 'objects')


def test_put_and_get_blob(store):
    blob = Blob(b'hello\n')
    blob_hash = store.put(blob)

    assert blob_hash == blob.hash
    loaded = store.get(blob_hash)
    assert isinstance(loaded, Blob)
    assert loaded.data == b'hello\n'


def test_object_path_is_sharded(store):
    """Test objects live at <first 2 chars>/<remaining 38 chars>."""
    blob_hash = store.put(Blob(b'sharded'))
    path = store.object_path(blob_hash)

    assert path.parent.name == blob_hash[:2]
    assert path.name == blob_hash[2:]
    assert len(path.name) == 38
    assert path.is_file()


def test_stored_bytes_are_compressed_encoding(store):
    blob = Blob(b'payload')
    store.put(blob)
    assert zlib.decompress(store.object_path(blob.hash).read_bytes()) == b'blob 7\0payload'


def test_put_is_idempotent(store):
    first = store.put(Blob(b'same'))
    mtime = store.object_path(first).stat().st_mtime_ns
    second = store.put(Blob(b'same'))

    assert first == second
    assert store.object_path(first).stat().st_mtime_ns == mtime
    assert len(store.list_hashes()) == 1


def test_get_commit_and_index(store):
    commit = Commit('message', 42, '+0100', {'a': 'a' * 40}, ['b' * 40])
    index = StagingIndex({'x': 'c' * 40, 'y': None})

    loaded_commit = store.get(store.put(commit))
    loaded_index = store.get(store.put(index))

    assert isinstance(loaded_commit, Commit)
    assert loaded_commit.tracked == {'a': 'a' * 40}
    assert isinstance(loaded_index, StagingIndex)
    assert loaded_index.changes == {'x': 'c' * 40, 'y': None}


def test_get_expected_type(store):
    blob_hash = store.put(Blob(b'not a commit'))
    assert isinstance(store.get(blob_hash, Blob), Blob)
    with pytest.raises(NotFoundError):
        store.get(blob_hash, Commit)


def test_get_missing(store):
    with pytest.raises(NotFoundError):
        store.get('0' * 40)
    with pytest.raises(NotFoundError):
        store.get('abc')


def test_get_corrupt_object(store):
    blob_hash = store.put(Blob(b'data'))
    store.object_path(blob_hash).write_bytes(b'not zlib at all')
    with pytest.raises(ObjectFormatError):
        store.get(blob_hash)


def test_get_size_mismatch(store):
    blob_hash = store.put(Blob(b'data'))
    store.object_path(blob_hash).write_bytes(zlib.compress(b'blob 99\0data'))
    with pytest.raises(ObjectFormatError):
        store.get(blob_hash)


def test_read_type(store):
    assert store.read_type(store.put(Blob(b'x'))) == 'blob'
    assert store.read_type(store.put(Commit.create_initial())) == 'commit'
    assert store.read_type(store.put(StagingIndex())) == 'index'


def test_exists(store):
    blob_hash = store.put(Blob(b'x'))
    assert store.exists(blob_hash)
    assert not store.exists('f' * 40)
    assert not store.exists(blob_hash[:10])


def test_list_hashes(store):
    hashes = {store.put(Blob(bytes([i]))) for i in range(5)}
    assert store.list_hashes() == hashes


def test_list_hashes_empty(tmp_path):
    assert ObjectStore(tmp_path / 'missing').list_hashes() == set()


def test_resolve_abbreviation(store):
    blob_hash = store.put(Blob(b'unique'))
    assert store.resolve_abbreviation(blob_hash[:6]) == blob_hash
    assert store.resolve_abbreviation(blob_hash) == blob_hash
    assert store.resolve_abbreviation(blob_hash[:6].upper()) == blob_hash


def test_resolve_abbreviation_not_found(store):
    store.put(Blob(b'something'))
    with pytest.raises(NotFoundError):
        store.resolve_abbreviation('zzzz')
    with pytest.raises(NotFoundError):
        store.resolve_abbreviation('0' * 40)
    with pytest.raises(NotFoundError):
        store.resolve_abbreviation('')


def test_resolve_abbreviation_ambiguous(store):
    """Test a prefix shared by two objects is rejected."""
    hashes = set()
    i = 0
    # Store blobs until two share a first character
    while True:
        blob_hash = store.put(Blob(str(i).encode()))
        if any(h[0] == blob_hash[0] for h in hashes):
            break
        hashes.add(blob_hash)
        i += 1

    with pytest.raises(AmbiguousReferenceError):
        store.resolve_abbreviation(blob_hash[0])


def test_delete(store):
    blob_hash = store.put(Blob(b'temporary'))
    assert store.delete(blob_hash)
    assert not store.exists(blob_hash)
    # Empty shard directory is removed too
    assert not store.object_path(blob_hash).parent.exists()
    assert not store.delete(blob_hash)
