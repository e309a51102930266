from unittest import mock

import pytest
from click.testing import CliRunner

from urikit.cli import urikit
from urikit.cli.urikit import cli
from config_utils import config_test_file


def test_config_list():
    config_file = config_test_file()
    runner = CliRunner()
    result = runner.invoke(cli, [f'--config-file={config_file}', 'config', 'list'])
    assert result.exception is None
    assert 'base.uri: http://example.com/path/to/dir/filename.html' in result.output
    assert 'output.format: text' in result.output


def test_config_get():
    config_file = config_test_file()
    runner = CliRunner()
    result = runner.invoke(cli, [f'--config-file={config_file}', 'config', 'get', 'output.format'])
    assert result.exception is None
    assert result.output == 'text\n'


def test_config_get_unknown_option():
    config_file = config_test_file()
    runner = CliRunner()
    result = runner.invoke(cli, [f'--config-file={config_file}', 'config', 'get', 'missing.option'])
    assert result.exit_code == 2
    assert 'unknown option' in result.output


def test_config_get_unset_option():
    config_file = config_test_file()
    runner = CliRunner()
    result = runner.invoke(cli, [f'--config-file={config_file}', 'config', 'get', 'output.normalize'])
    assert isinstance(result.exception, KeyError)


def test_config_set_and_delete(tmp_path):
    env = {
        'URIKIT_USER_CONFIG_PATH': str(tmp_path / 'urikit.cfg'),
        'URIKIT_SITE_CONFIG_PATH': str(tmp_path / 'site.cfg'),
    }
    runner = CliRunner()
    result = runner.invoke(cli, ['config', 'set', 'base.uri', 'http://example.com/'], env=env)
    assert result.exception is None
    assert 'uri = http://example.com/' in (tmp_path / 'urikit.cfg').read_text()

    result = runner.invoke(cli, ['config', 'get', 'base.uri'], env=env)
    assert result.output == 'http://example.com/\n'

    result = runner.invoke(cli, ['config', 'delete', 'base.uri'], env=env)
    assert result.output == 'Success.\n'
    assert 'uri = http://example.com/' not in (tmp_path / 'urikit.cfg').read_text()


def test_main_reports_errors(capsys):
    with mock.patch('sys.argv', ['urikit', 'parse', 'http://host:bad/']):
        with pytest.raises(SystemExit) as excinfo:
            urikit.main()
    assert excinfo.value.code == 1
    assert "Error: Invalid port 'bad'" in capsys.readouterr().err


def test_config_set_rejects_invalid_values(tmp_path):
    env = {
        'URIKIT_USER_CONFIG_PATH': str(tmp_path / 'urikit.cfg'),
        'URIKIT_SITE_CONFIG_PATH': str(tmp_path / 'site.cfg'),
    }
    runner = CliRunner()
    result = runner.invoke(cli, ['config', 'set', 'base.uri', 'relative/path'], env=env)
    assert result.exit_code == 2
    assert 'absolute URI' in result.output
    result = runner.invoke(cli, ['config', 'set', 'output.format', 'json'], env=env)
    assert result.exit_code == 2
    assert "Unknown output format 'json'" in result.output
    assert not (tmp_path / 'urikit.cfg').exists()


def test_config_path(tmp_path):
    env = {
        'URIKIT_USER_CONFIG_PATH': str(tmp_path / 'urikit.cfg'),
        'URIKIT_SITE_CONFIG_PATH': str(tmp_path / 'site.cfg'),
    }
    runner = CliRunner()
    result = runner.invoke(cli, ['config', 'path'], env=env)
    assert result.exception is None
    assert result.output == f"user: {tmp_path / 'urikit.cfg'}\nsite: {tmp_path / 'site.cfg'}\n"
