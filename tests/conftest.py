"""Shared pytest fixtures for Twig tests."""

import os
import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from twig.core.config import Config
from twig.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.twigconfig and TWIG_* variables out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.twigconfig')
    for key in list(os.environ):
        if key.startswith('TWIG_'):
            monkeypatch.delenv(key)
    return home / '.twigconfig'


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def write_file(repo):
    """Write a file in the work tree, creating parent directories."""
    def _write(name, content):
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def commit_file(repo, write_file):
    """Write, stage and commit one file; returns the commit hash."""
    def _commit(name, content, message=None):
        write_file(name, content)
        repo.add(name)
        return repo.commit(message or f"Write {name}: {content!r}")
    return _commit


@pytest.fixture
def diverged(repo, commit_file):
    """
    Repository whose master and feature branches share one commit and
    then each add one.

    Returns:
        dict with the 'base', 'master' and 'feature' commit hashes
    """
    base = commit_file('shared.txt', 'shared\n', 'Add shared file')
    repo.branch('feature')

    ours = commit_file('master.txt', 'master\n', 'Work on master')

    repo.checkout_branch('feature')
    theirs = commit_file('feature.txt', 'feature\n', 'Work on feature')

    repo.checkout_branch('master')
    return {'base': base, 'master': ours, 'feature': theirs}


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run CLI commands from inside the repository."""
    monkeypatch.chdir(repo.work_tree)
    return repo
