import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from selenium.webdriver.remote.webdriver import WebDriver

from ...data_models import AssistantSettings, RemoteGridOptions
from ..browser_manager.constants import set_wdm_ssl_verify
from ..browser_manager.lifecycle import SessionLifecycleManager
from ..exceptions import UnsupportedPlatformError
from .descriptors import BrowserDescriptor, KNOWN_DESCRIPTORS, RELEASES, platform_key
from .local import LocalBrowser
from .remote import RemoteBrowser

logger = logging.getLogger(__name__)

DISCOVERY_PLATFORMS = ('darwin', 'linux')


class BrowserRegistry:
    """
    Entry point for finding browsers.

    Settings are copied at construction; each call builds fresh browser
    instances, so later changes to the caller's settings object never leak
    into browsers already handed out.
    """

    def __init__(
        self,
        settings: Optional[AssistantSettings] = None,
        *,
        platform: str = sys.platform,
        descriptors: Iterable[BrowserDescriptor] = KNOWN_DESCRIPTORS,
    ):
        self.settings = settings.model_copy(deep=True) if settings else AssistantSettings()
        self.platform = platform
        self._descriptors: Dict[str, BrowserDescriptor] = {d.id: d for d in descriptors}

        ssl_verify = self.settings.driver.webdriver_manager_ssl_verify
        if ssl_verify is not None:
            set_wdm_ssl_verify(ssl_verify)
            logger.info("WebDriver Manager SSL verification set.")

        self.lifecycle = SessionLifecycleManager(
            grace_period=self.settings.kill_grace_period_seconds,
            settle_period=self.settings.kill_settle_period_seconds,
        )

    def get_install_dir(self) -> Path:
        return self.settings.resolved_install_dir(self.platform)

    def list_known_descriptors(self) -> Tuple[BrowserDescriptor, ...]:
        return tuple(self._descriptors.values())

    def get_descriptor(self, browser_id: str) -> Optional[BrowserDescriptor]:
        return self._descriptors.get(browser_id)

    def create_local_browser(self, browser_id: str, release: str) -> Optional[LocalBrowser]:
        """
        Builds the local browser for `browser_id` on `release`.

        Returns None for an unknown (or remote-only) browser id. An invalid
        release raises BrowserConfigurationError.
        """
        descriptor = self.get_descriptor(browser_id)
        if descriptor is None or not descriptor.local:
            logger.warning(f"No local browser known for id '{browser_id}'.")
            return None

        return LocalBrowser(
            descriptor,
            release,
            install_dir=self.get_install_dir(),
            platform=self.platform,
            blacklist=self.settings.blacklist.get(browser_id),
            min_version=self.settings.min_versions.get(browser_id),
            driver_settings=self.settings.driver,
            version_probe_timeout=self.settings.version_probe_timeout_seconds,
        )

    def create_remote_browser(
        self,
        browser_id: str,
        version: str,
        options: Optional[Union[RemoteGridOptions, Dict[str, Any]]] = None,
    ) -> Optional[RemoteBrowser]:
        """
        Builds a Sauce Labs browser for `browser_id` at `version`.

        Options without credentials fall back to the credentials in settings.
        Returns None for an unknown (or local-only) browser id.
        """
        descriptor = self.get_descriptor(browser_id)
        if descriptor is None or not descriptor.remote:
            logger.warning(f"No remote browser known for id '{browser_id}'.")
            return None

        if options is None:
            grid_options = self.settings.saucelabs
        else:
            grid_options = options if isinstance(options, RemoteGridOptions) else RemoteGridOptions.model_validate(options)
            if not grid_options.has_credentials():
                grid_options = grid_options.model_copy(update={
                    'username': self.settings.saucelabs.username,
                    'access_key': self.settings.saucelabs.access_key,
                })

        return RemoteBrowser(descriptor, version, grid_options)

    def list_local_browsers(self) -> List[LocalBrowser]:
        """Every local browser/release combination, usable or not."""
        browsers: List[LocalBrowser] = []
        for descriptor in self._descriptors.values():
            if not descriptor.local:
                continue
            for release in RELEASES:
                browser = self.create_local_browser(descriptor.id, release)
                if browser is not None:
                    browsers.append(browser)
        return browsers

    def list_valid_local_browsers(self) -> List[LocalBrowser]:
        """
        Browsers that can start a driver session on this machine.

        Raises UnsupportedPlatformError anywhere but macOS and Linux.
        """
        if platform_key(self.platform) not in DISCOVERY_PLATFORMS:
            raise UnsupportedPlatformError(self.platform)
        return [browser for browser in self.list_local_browsers() if browser.is_valid()]

    async def kill_session(self, driver: Optional[WebDriver]) -> None:
        await self.lifecycle.kill_session(driver)
