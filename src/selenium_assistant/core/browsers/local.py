import logging
import os
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional

from ...data_models import DriverSettings
from ...utils.process import capture_stdout
from ...utils.proxy_manager import ProxyManager
from ..browser_manager.options import configure_driver_options
from ..browser_manager.session import DriverSessionConfig
from ..exceptions import BrowserConfigurationError
from .base import BrowserEntity, ProbeCache
from .descriptors import BrowserDescriptor, RELEASES, UNKNOWN_VERSION

logger = logging.getLogger(__name__)


class LocalBrowser(BrowserEntity):
    """
    A browser installed on this machine, for one release channel.

    The executable path and the raw version string are probed lazily and
    cached for the lifetime of the instance, including when nothing was
    found. Build a new instance to probe again (e.g. after a download).
    """

    def __init__(
        self,
        descriptor: BrowserDescriptor,
        release: str,
        *,
        install_dir: Optional[Path] = None,
        platform: str = sys.platform,
        blacklist: Optional[Mapping[int, str]] = None,
        min_version: Optional[int] = None,
        driver_settings: Optional[DriverSettings] = None,
        version_probe_timeout: Optional[float] = 10.0,
    ):
        super().__init__(descriptor)

        if release not in RELEASES:
            raise BrowserConfigurationError(f"Unexpected browser release given: {release!r}")

        release_suffix = descriptor.release_names.get(release)
        if release_suffix:
            self._pretty_name = f"{self._pretty_name} {release_suffix}"

        self._release = release
        self._install_dir = Path(install_dir) if install_dir is not None else None
        self._platform = platform
        self._blacklist: Dict[int, str] = {**descriptor.blacklist, **(blacklist or {})}
        # 0 turns the descriptor's minimum off
        self._min_version = descriptor.min_version if min_version is None else min_version
        self._driver_settings = driver_settings.model_copy(deep=True) if driver_settings else DriverSettings()
        self._proxy = ProxyManager(self._driver_settings.proxy_pools).resolve(self._driver_settings.proxy, key=descriptor.id)
        self._version_probe_timeout = version_probe_timeout

        self._executable_path: ProbeCache[str] = ProbeCache(self._find_executable)
        self._raw_version: ProbeCache[str] = ProbeCache(self._probe_raw_version)

    def get_release_name(self) -> str:
        """'stable', 'beta' or 'unstable'."""
        return self._release

    def get_min_supported_version(self) -> Optional[int]:
        return self._min_version or None

    def get_blacklist(self) -> Dict[int, str]:
        return dict(self._blacklist)

    def _find_executable(self) -> Optional[str]:
        for candidate in self._descriptor.candidate_paths(self._release, self._platform, self._install_dir):
            try:
                if candidate.exists():
                    logger.debug(f"Found {self._pretty_name} at {candidate}")
                    return str(candidate)
            except OSError as e:
                logger.debug(f"Could not check {candidate}: {e}")
        logger.debug(f"No executable found for {self._pretty_name} on {self._platform}")
        return None

    def get_executable_path(self) -> Optional[str]:
        """Path of the browser executable, or None if it can't be found."""
        return self._executable_path.get()

    def _probe_raw_version(self) -> Optional[str]:
        executable_path = self.get_executable_path()
        if not executable_path:
            return None
        reader = self._descriptor.raw_version_reader
        if reader is not None:
            output = reader(executable_path)
        else:
            output = capture_stdout(executable_path, self._descriptor.version_args, timeout=self._version_probe_timeout)
        return output.strip() if output and output.strip() else None

    def get_raw_version_string(self) -> Optional[str]:
        """Output of `<executable> --version` (or the app bundle version), cached."""
        try:
            return self._raw_version.get()
        except Exception as e:
            logger.debug(f"Raw version probe for {self._pretty_name} failed: {e}")
            return None

    def is_blacklisted(self) -> bool:
        version = self.get_version_number()
        return version != UNKNOWN_VERSION and version in self._blacklist

    def get_blacklist_reason(self) -> Optional[str]:
        return self._blacklist.get(self.get_version_number())

    def is_valid(self) -> bool:
        try:
            executable_path = self.get_executable_path()
            if not executable_path:
                return False

            # The file may have been removed since it was found
            os.lstat(executable_path)

            min_version = self.get_min_supported_version()
            if min_version and self.get_version_number() < min_version:
                logger.debug(f"{self._pretty_name} {self.get_version_number()} is older than the minimum {min_version}")
                return False

            if self.is_blacklisted():
                logger.debug(f"{self._pretty_name} is blacklisted: {self.get_blacklist_reason()}")
                return False

            return True
        except Exception as e:
            logger.debug(f"Validity check for {self._pretty_name} failed: {e}")
            return False

    def get_selenium_driver_builder(self) -> DriverSessionConfig:
        builder = self._new_builder()

        executable_path = self.get_executable_path()
        if executable_path:
            builder.set_binary(executable_path)

        settings = self._driver_settings
        configure_driver_options(
            builder.options,
            self._descriptor.selenium_name,
            headless=settings.headless,
            window_size=settings.window_size,
            proxy=self._proxy,
            additional_options=settings.driver_options,
        )

        for name, value in self._descriptor.release_capabilities.get(self._release, {}).items():
            builder.set_capability(name, value)

        driver_path = settings.driver_paths.get(self._descriptor.id) or self._descriptor.release_driver_paths.get(self._release)
        builder.set_driver_path(driver_path).set_service_args(settings.service_args.get(self._descriptor.id))
        if self._install_dir is not None:
            builder.set_driver_cache_dir(self._install_dir / 'drivers')

        return builder.for_browser(self._descriptor.selenium_name)
