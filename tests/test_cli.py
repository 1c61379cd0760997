"""
Tests for the mailgroups click CLI.
"""
import logging
import pytest
import yaml
from click.testing import CliRunner

from mailgroups.cli import cli
from mailgroups.logger import PACKAGE_LOGGER


@pytest.fixture
def cli_config_file(tmp_path, groups_config_dict):
    """Groups config with quiet logging so command output stays clean."""
    groups_config_dict['logging'] = {'level': 'WARNING'}
    config_file = tmp_path / "groups.yaml"
    with open(config_file, 'w') as f:
        yaml.dump(groups_config_dict, f)
    return str(config_file)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs on the package logger."""
    yield
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()


def _invoke(config_path, *args, env_path=None):
    runner = CliRunner()
    base = ['--config', config_path]
    if env_path:
        base += ['--env', env_path]
    return runner.invoke(cli, base + list(args), obj={})


class TestMatchCommand:
    """Tests for the match command."""

    def test_lists_matching_groups(self, cli_config_file):
        result = _invoke(cli_config_file, 'match', 'boss@example.com')
        assert result.exit_code == 0
        assert result.output.splitlines() == ['team', 'vip']

    def test_case_insensitive_address(self, cli_config_file):
        result = _invoke(cli_config_file, 'match', 'ALICE@example.com')
        assert result.exit_code == 0
        assert result.output.splitlines() == ['team']

    def test_no_match_exit_code(self, cli_config_file):
        result = _invoke(cli_config_file, 'match', 'nobody@example.net')
        assert result.exit_code == 1
        assert result.output == ''

    def test_single_group(self, cli_config_file):
        result = _invoke(cli_config_file, 'match', 'boss@example.com', '--group', 'vip')
        assert result.exit_code == 0
        assert result.output.strip() == 'yes'

        result = _invoke(cli_config_file, 'match', 'alice@example.com', '--group', 'vip')
        assert result.exit_code == 1
        assert result.output.strip() == 'no'

    def test_destroyed_group_is_unknown(self, cli_config_file):
        result = _invoke(cli_config_file, 'match', 'carol@example.com', '--group', 'temp')
        assert result.exit_code == 1


class TestListCommand:
    """Tests for the list command."""

    def test_lists_groups(self, cli_config_file):
        result = _invoke(cli_config_file, 'list')
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == 'team'
        assert '  address: Alice Example <alice@example.com>' in lines
        assert '  address: bob@example.com' in lines
        assert '  pattern: ^boss@' in lines
        assert 'vip' in lines
        assert 'temp' not in lines

    def test_no_groups(self, tmp_path):
        p = tmp_path / "groups.yaml"
        p.write_text("statements: []\n")
        result = _invoke(str(p), 'list')
        assert result.exit_code == 0
        assert 'No groups defined.' in result.output


class TestConfigErrors:
    """Tests for configuration failures surfaced by the CLI."""

    def test_missing_config(self, tmp_path):
        result = _invoke(str(tmp_path / "missing.yaml"), 'list')
        assert result.exit_code == 1
        assert 'Configuration error' in result.output

    def test_invalid_regex_in_config(self, invalid_regex_config_file):
        result = _invoke(invalid_regex_config_file, 'match', 'alice@example.com')
        assert result.exit_code == 1
        assert 'Configuration error' in result.output
        assert 'statement #2' in result.output

    def test_env_file_override(self, cli_config_file, tmp_path, restore_environ):
        """Test a .env file can switch off case-insensitive patterns."""
        env_file = tmp_path / ".env"
        env_file.write_text("MAILGROUPS_MATCHING_IGNORE_CASE=false\n")
        result = _invoke(cli_config_file, 'match', 'BOSS@example.com', '--group', 'vip',
                         env_path=str(env_file))
        assert result.output.strip() == 'no'


def test_config_path_from_environment(cli_config_file, caplog):
    """Test MAILGROUPS_CONFIG selects the file without being read as an override."""
    with caplog.at_level(logging.WARNING):
        result = CliRunner().invoke(cli, ['match', 'boss@example.com'], obj={},
                                    env={'MAILGROUPS_CONFIG': cli_config_file})
    assert result.exit_code == 0
    assert result.output.splitlines() == ['team', 'vip']
    assert not [r for r in caplog.records if 'MAILGROUPS_CONFIG' in r.getMessage()]


def test_help():
    result = CliRunner().invoke(cli, ['--help'], obj={})
    assert result.exit_code == 0
    assert 'match' in result.output
    assert 'list' in result.output
