"""Tests for settings loading, the pydantic settings models, proxies and logging setup."""
import json
import logging
import subprocess
import sys
import zlib
from pathlib import Path
from unittest.mock import patch

import pytest

from selenium_assistant.core.browsers.local import LocalBrowser
from selenium_assistant.core.config_loader import ConfigLoader
from selenium_assistant.data_models import AssistantSettings, DriverSettings, RemoteGridOptions, get_default_install_dir
from selenium_assistant.utils.logger import setup_logger
from selenium_assistant.utils.process import capture_stdout
from selenium_assistant.utils.proxy_manager import ProxyManager


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({
        'selenium_assistant': {
            'install_dir': str(tmp_path / 'browsers'),
            'saucelabs': {'username': 'ci-bot', 'access_key': 's3cr3t'},
            'blacklist': {'chrome': {'54': 'broken', '99': 'also broken'}},
            'min_versions': {'firefox': 60},
            'kill_grace_period_seconds': 1,
        },
        'logging': {'level': 'debug'},
    }), encoding='utf-8')
    return path


class TestConfigLoader:

    def test_dot_path_lookup(self, settings_file):
        loader = ConfigLoader(settings_file)
        assert loader.get_setting('selenium_assistant.saucelabs.username') == 'ci-bot'
        assert loader.get_assistant_setting('min_versions') == {'firefox': 60}
        assert loader.get_logging_setting('level') == 'debug'

    def test_missing_and_non_dict_paths_return_default(self, settings_file):
        loader = ConfigLoader(settings_file)
        assert loader.get_setting('selenium_assistant.nope', 'fallback') == 'fallback'
        assert loader.get_setting('logging.level.deeper', 7) == 7

    def test_missing_file_gives_empty_settings(self, tmp_path):
        assert ConfigLoader(tmp_path / 'absent.json').get_settings() == {}

    def test_invalid_json_gives_empty_settings(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{"selenium_assistant": ', encoding='utf-8')
        assert ConfigLoader(path).get_settings() == {}

    def test_directory_is_not_a_settings_file(self, tmp_path):
        assert ConfigLoader(tmp_path).get_settings() == {}

    def test_inline_settings_skip_the_file(self, tmp_path):
        loader = ConfigLoader(tmp_path / 'absent.json', settings={'logging': {'level': 'ERROR'}})
        assert loader.get_logging_setting('level') == 'ERROR'


class TestAssistantSettings:

    def test_from_config_loader(self, settings_file, tmp_path):
        settings = AssistantSettings.from_config_loader(ConfigLoader(settings_file))

        assert settings.resolved_install_dir() == tmp_path / 'browsers'
        assert settings.saucelabs.has_credentials()
        assert settings.blacklist == {'chrome': {54: 'broken', 99: 'also broken'}}
        assert settings.min_versions == {'firefox': 60}
        assert settings.kill_grace_period_seconds == 1.0
        assert settings.kill_settle_period_seconds == 2.0

    def test_defaults_when_block_missing(self, tmp_path):
        settings = AssistantSettings.from_config_loader(ConfigLoader(tmp_path / 'absent.json'))
        assert settings.install_dir is None
        assert settings.saucelabs.has_credentials() is False
        assert settings.driver.headless is False

    def test_install_dir_expands_user(self):
        settings = AssistantSettings(install_dir='~/browsers')
        assert settings.resolved_install_dir() == Path.home() / 'browsers'

    @pytest.mark.parametrize("platform,folder", [
        ('linux', '.selenium-assistant'),
        ('darwin', '.selenium-assistant'),
        ('win32', 'selenium-assistant'),
    ])
    def test_default_install_dir(self, platform, folder):
        assert get_default_install_dir(platform) == Path.home() / folder
        assert AssistantSettings().resolved_install_dir(platform) == Path.home() / folder


class TestRemoteGridOptions:

    def test_command_executor(self):
        options = RemoteGridOptions(host='ondemand.us-west-1.saucelabs.com', port=4443)
        assert options.command_executor == 'https://ondemand.us-west-1.saucelabs.com:4443/wd/hub'

    @pytest.mark.parametrize("username,access_key,expected", [
        ('ci-bot', 's3cr3t', True),
        ('ci-bot', None, False),
        (None, 's3cr3t', False),
        ('  ', 's3cr3t', False),
    ])
    def test_has_credentials(self, username, access_key, expected):
        assert RemoteGridOptions(username=username, access_key=access_key).has_credentials() is expected


class TestProxyManager:

    def test_direct_value(self):
        assert ProxyManager().resolve(' http://proxy:3128 ') == 'http://proxy:3128'

    @pytest.mark.parametrize("value", [None, '', 'pool:missing'])
    def test_nothing_to_resolve(self, value):
        assert ProxyManager({'other': ['http://a:1']}).resolve(value) is None

    def test_env_interpolation(self, monkeypatch):
        monkeypatch.setenv('PROXY_HOST', 'corp-proxy')
        assert ProxyManager().resolve('http://${PROXY_HOST}:8080') == 'http://corp-proxy:8080'

    def test_pool_pick_is_stable_per_key(self):
        manager = ProxyManager({'office': ['http://a:1', 'http://b:2', 'http://c:3']})
        picks = {manager.resolve('pool:office', key='chrome') for _ in range(5)}
        assert len(picks) == 1
        assert manager.resolve('pool:office') == 'http://a:1'

    def test_pool_pick_is_sticky_per_browser_family(self, descriptor_by_id):
        pool = ['http://a:1', 'http://b:2', 'http://c:3']
        settings = DriverSettings(proxy='pool:office', proxy_pools={'office': pool})
        expected = pool[zlib.crc32(b'chrome') % len(pool)]

        for _ in range(3):
            builder = LocalBrowser(descriptor_by_id('chrome'), 'stable', driver_settings=settings) \
                .get_selenium_driver_builder()
            assert f'--proxy-server={expected}' in builder.options.arguments


class TestCaptureStdout:

    def test_returns_stdout(self):
        output = capture_stdout(sys.executable, ['-c', 'print("Mozilla Firefox 121.0")'], timeout=30)
        assert output.strip() == 'Mozilla Firefox 121.0'

    def test_undecodable_bytes_are_replaced(self):
        script = "import sys; sys.stdout.buffer.write(b'Google Chrome 120.0 \\xff\\xfe\\n')"
        output = capture_stdout(sys.executable, ['-c', script], timeout=30)
        assert output.startswith('Google Chrome 120.0 ')
        assert '�' in output

    def test_non_zero_exit_is_none(self):
        assert capture_stdout(sys.executable, ['-c', 'import sys; sys.exit(2)'], timeout=30) is None

    def test_missing_binary_is_none(self, tmp_path):
        assert capture_stdout(str(tmp_path / 'no-such-browser'), ['--version']) is None

    def test_timeout_is_none(self):
        with patch('selenium_assistant.utils.process.subprocess.run',
                   side_effect=subprocess.TimeoutExpired(cmd='chrome', timeout=1)):
            assert capture_stdout('chrome', ['--version'], timeout=1) is None


class TestSetupLogger:

    def test_console_and_file_handlers(self, tmp_path):
        log_path = tmp_path / 'logs' / 'assistant.log'
        loader = ConfigLoader(settings={'logging': {
            'level': 'DEBUG',
            'file_handler': {'enabled': True, 'path': str(log_path), 'rotation_type': 'size'},
        }})

        logger = setup_logger(loader, logger_name='selenium_assistant.test')
        try:
            assert logger.level == logging.DEBUG
            assert logger.propagate is False
            kinds = {type(h).__name__ for h in logger.handlers}
            assert kinds == {'StreamHandler', 'RotatingFileHandler'}

            logger.info("driver session started")
            for handler in logger.handlers:
                handler.flush()
            assert "driver session started" in log_path.read_text(encoding='utf-8')
        finally:
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

    def test_all_handlers_disabled(self):
        loader = ConfigLoader(settings={'logging': {'console_handler': {'enabled': False}}})
        logger = setup_logger(loader, logger_name='selenium_assistant.quiet')
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]

    def test_repeated_setup_does_not_duplicate(self):
        loader = ConfigLoader(settings={'logging': {'level': 'WARNING'}})
        setup_logger(loader, logger_name='selenium_assistant.repeat')
        logger = setup_logger(loader, logger_name='selenium_assistant.repeat')
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
