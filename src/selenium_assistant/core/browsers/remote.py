import logging
import re
from typing import Any, Dict, Optional

from ...data_models import RemoteGridOptions
from ..browser_manager.session import DriverSessionConfig
from ..exceptions import BrowserConfigurationError
from .base import BrowserEntity
from .descriptors import BrowserDescriptor, UNKNOWN_VERSION

logger = logging.getLogger(__name__)


class RemoteBrowser(BrowserEntity):
    """
    A browser hosted on the Sauce Labs grid.

    Identified by the family, the requested version ("latest", "latest-1",
    "120", ...) and the grid options. Nothing is probed locally; the version
    is whatever was requested.
    """

    def __init__(self, descriptor: BrowserDescriptor, version: str, grid_options: Optional[RemoteGridOptions] = None):
        super().__init__(descriptor)

        if not descriptor.remote:
            raise BrowserConfigurationError(f"{descriptor.pretty_name} is not available on the remote grid.")
        if not isinstance(version, str) or not version.strip():
            raise BrowserConfigurationError(f"Invalid remote browser version: {version!r}")

        self._version = version.strip()
        self._grid = grid_options.model_copy(deep=True) if grid_options else RemoteGridOptions()
        self._pretty_name = f"{self._pretty_name} ({self._version})"

    def get_requested_version(self) -> str:
        return self._version

    def get_grid_options(self) -> RemoteGridOptions:
        return self._grid.model_copy(deep=True)

    def get_raw_version_string(self) -> Optional[str]:
        return self._version

    def get_version_number(self) -> int:
        match = re.match(r'(\d+)', self._version)
        return int(match.group(1)) if match else UNKNOWN_VERSION

    def is_valid(self) -> bool:
        try:
            return self._descriptor.remote and self._grid.has_credentials()
        except Exception as e:
            logger.debug(f"Validity check for remote {self._pretty_name} failed: {e}")
            return False

    def _sauce_options(self) -> Dict[str, Any]:
        sauce_options: Dict[str, Any] = {
            'username': self._grid.username,
            'accessKey': self._grid.access_key,
        }
        if self._grid.tunnel_identifier:
            sauce_options['tunnelIdentifier'] = self._grid.tunnel_identifier
        sauce_options.update(self._grid.extra_capabilities)
        return sauce_options

    def get_selenium_driver_builder(self) -> DriverSessionConfig:
        builder = self._new_builder().set_browser_version(self._version)
        if self._grid.platform_name:
            builder.set_capability('platformName', self._grid.platform_name)
        builder.set_capability('sauce:options', self._sauce_options())
        return builder.using_server(self._grid.command_executor).for_browser(self._descriptor.selenium_name)
