"""Integration tests for config and gc commands."""

from twig.cli.main import cli
from twig.core.index import StagingIndex


class TestConfigCommand:
    """Tests for twig config."""

    def test_config_set_and_get(self, runner, in_repo):
        result = runner.invoke(cli, ['config', 'set', 'user.name', 'Ada'])
        assert result.exit_code == 0

        result = runner.invoke(cli, ['config', 'get', 'user.name'])
        assert result.exit_code == 0
        assert result.output.strip() == 'Ada'

    def test_config_get_default(self, runner, in_repo):
        result = runner.invoke(cli, ['config', 'get', 'core.abbrev'])
        assert result.output.strip() == '7'

    def test_config_get_missing(self, runner, in_repo):
        result = runner.invoke(cli, ['config', 'get', 'nonexistent.key'])
        assert result.exit_code != 0
        assert 'Config key not found' in result.output

    def test_config_global(self, runner, in_repo, isolated_config):
        result = runner.invoke(cli, ['config', 'set', '--global', 'init.defaultbranch', 'main'])
        assert result.exit_code == 0
        assert 'defaultbranch = main' in isolated_config.read_text()

        result = runner.invoke(cli, ['config', 'get', '--global', 'init.defaultbranch'])
        assert result.output.strip() == 'main'

    def test_config_unset(self, runner, in_repo):
        runner.invoke(cli, ['config', 'set', 'user.name', 'Ada'])

        result = runner.invoke(cli, ['config', 'unset', 'user.name'])
        assert result.exit_code == 0

        result = runner.invoke(cli, ['config', 'unset', 'user.name'])
        assert result.exit_code != 0

    def test_config_list(self, runner, in_repo):
        runner.invoke(cli, ['config', 'set', 'user.name', 'Ada'])

        result = runner.invoke(cli, ['config', 'list'])

        assert result.exit_code == 0
        assert 'user.name=Ada' in result.output
        assert 'core.repositoryformatversion=0' in result.output

    def test_abbrev_changes_output(self, runner, in_repo, commit_file):
        runner.invoke(cli, ['config', 'set', 'core.abbrev', '12'])
        commit_hash = commit_file('a.txt', 'a')

        result = runner.invoke(cli, ['branch', 'feature'])
        assert commit_hash[:12] in result.output


class TestGcCommand:
    """Tests for twig gc."""

    def test_gc_removes_stale_indexes(self, runner, in_repo, write_file, monkeypatch):
        monkeypatch.setenv('TWIG_CORE_AUTOCOMPACT', 'false')
        write_file('a.txt', 'a')
        write_file('b.txt', 'b')
        runner.invoke(cli, ['add', 'a.txt', 'b.txt'])

        result = runner.invoke(cli, ['gc'])

        assert result.exit_code == 0
        assert 'Removed 2 stale index object(s)' in result.output
        indexes = [h for h in in_repo.objects.list_hashes()
                   if in_repo.objects.read_type(h) == StagingIndex.type]
        assert indexes == [in_repo.refs.read_staged()]
