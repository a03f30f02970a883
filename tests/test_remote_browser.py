"""Tests for RemoteBrowser and the Sauce Labs capabilities it produces."""
import pytest

from selenium_assistant.core.browsers.descriptors import (
    CHROME_DESCRIPTOR,
    FIREFOX_DESCRIPTOR,
    INTERNET_EXPLORER_DESCRIPTOR,
    UNKNOWN_VERSION,
)
from selenium_assistant.core.browsers.remote import RemoteBrowser
from selenium_assistant.core.exceptions import BrowserConfigurationError
from selenium_assistant.data_models import RemoteGridOptions


@pytest.fixture
def grid_options():
    return RemoteGridOptions(username='ci-bot', access_key='s3cr3t', tunnel_identifier='build-42')


class TestRemoteBrowser:

    def test_pretty_name_includes_requested_version(self, grid_options):
        browser = RemoteBrowser(CHROME_DESCRIPTOR, 'latest-1', grid_options)
        assert browser.get_pretty_name() == 'Google Chrome (latest-1)'
        assert browser.get_requested_version() == 'latest-1'
        assert browser.get_release_name() is None
        assert browser.get_executable_path() is None

    @pytest.mark.parametrize("version,expected", [
        ('120', 120),
        ('121.0', 121),
        ('latest', UNKNOWN_VERSION),
        ('beta', UNKNOWN_VERSION),
    ])
    def test_version_number(self, grid_options, version, expected):
        assert RemoteBrowser(FIREFOX_DESCRIPTOR, version, grid_options).get_version_number() == expected

    @pytest.mark.parametrize("version", ['', '   ', None])
    def test_rejects_blank_version(self, grid_options, version):
        with pytest.raises(BrowserConfigurationError):
            RemoteBrowser(CHROME_DESCRIPTOR, version, grid_options)

    def test_internet_explorer_is_available(self, grid_options):
        browser = RemoteBrowser(INTERNET_EXPLORER_DESCRIPTOR, '11', grid_options)
        assert browser.is_valid() is True
        assert browser.get_selenium_browser_id() == 'internet explorer'

    def test_invalid_without_credentials(self):
        assert RemoteBrowser(CHROME_DESCRIPTOR, 'latest').is_valid() is False
        blank = RemoteGridOptions(username='ci-bot', access_key='  ')
        assert RemoteBrowser(CHROME_DESCRIPTOR, 'latest', blank).is_valid() is False

    def test_grid_options_are_copied(self, grid_options):
        browser = RemoteBrowser(CHROME_DESCRIPTOR, 'latest', grid_options)
        grid_options.username = None

        assert browser.is_valid() is True
        browser.get_grid_options().access_key = None
        assert browser.get_grid_options().access_key == 's3cr3t'


class TestRemoteDriverBuilder:

    def test_targets_sauce_labs(self, grid_options):
        builder = RemoteBrowser(CHROME_DESCRIPTOR, '120', grid_options).get_selenium_driver_builder()
        assert builder.remote_url == 'https://ondemand.saucelabs.com:443/wd/hub'
        assert builder.browser_name == 'chrome'

    def test_capabilities(self, grid_options):
        grid_options.platform_name = 'Windows 11'
        grid_options.extra_capabilities = {'name': 'smoke test', 'build': '42'}

        capabilities = RemoteBrowser(FIREFOX_DESCRIPTOR, 'latest', grid_options) \
            .get_selenium_driver_builder().get_capabilities()

        assert capabilities['browserName'] == 'firefox'
        assert capabilities['browserVersion'] == 'latest'
        assert capabilities['platformName'] == 'Windows 11'
        assert capabilities['sauce:options'] == {
            'username': 'ci-bot',
            'accessKey': 's3cr3t',
            'tunnelIdentifier': 'build-42',
            'name': 'smoke test',
            'build': '42',
        }

    def test_no_tunnel_or_platform_unless_configured(self):
        options = RemoteGridOptions(username='ci-bot', access_key='s3cr3t', host='eu-central-1.saucelabs.com')
        builder = RemoteBrowser(CHROME_DESCRIPTOR, 'latest', options).get_selenium_driver_builder()
        capabilities = builder.get_capabilities()

        assert 'tunnelIdentifier' not in capabilities['sauce:options']
        assert 'platformName' not in capabilities
        assert builder.remote_url == 'https://eu-central-1.saucelabs.com:443/wd/hub'
