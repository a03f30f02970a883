import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from selenium.webdriver.remote.webdriver import WebDriver

from ...data_models import BrowserInfo
from ..browser_manager.session import DriverSessionConfig
from ..exceptions import BrowserConfigurationError
from .descriptors import BrowserDescriptor, UNKNOWN_VERSION

logger = logging.getLogger(__name__)

T = TypeVar('T')

_NOT_COMPUTED = object()


class ProbeCache(Generic[T]):
    """
    Lazily computed value that is computed at most once.

    A probe that finds nothing (None) is cached just like a found value, so
    a failed lookup is not retried for the lifetime of the owner. A probe that
    raises is cached as None and the error propagates from that first call only.
    """

    def __init__(self, compute: Callable[[], Optional[T]]):
        self._compute = compute
        self._value: object = _NOT_COMPUTED

    @property
    def computed(self) -> bool:
        return self._value is not _NOT_COMPUTED

    def get(self) -> Optional[T]:
        if self._value is _NOT_COMPUTED:
            try:
                self._value = self._compute()
            except Exception:
                self._value = None
                raise
        return self._value  # type: ignore[return-value]


class BrowserEntity(ABC):
    """One concrete browser: a family plus a release channel or a requested version."""

    def __init__(self, descriptor: BrowserDescriptor):
        if not isinstance(descriptor.pretty_name, str) or not descriptor.pretty_name.strip():
            raise BrowserConfigurationError(f"Invalid prettyName value: {descriptor.pretty_name!r}")
        self._descriptor = descriptor
        self._pretty_name = descriptor.pretty_name

    def get_id(self) -> str:
        return self._descriptor.id

    def get_selenium_browser_id(self) -> str:
        return self._descriptor.selenium_name

    def get_descriptor(self) -> BrowserDescriptor:
        return self._descriptor

    def get_pretty_name(self) -> str:
        return self._pretty_name

    @abstractmethod
    def is_valid(self) -> bool:
        """True if this browser could produce a working driver session right now."""

    @abstractmethod
    def get_raw_version_string(self) -> Optional[str]:
        """Platform-native version string, or None if it can't be determined."""

    def get_version_number(self) -> int:
        """Major version, or UNKNOWN_VERSION. Never raises."""
        try:
            return self._descriptor.parse_version(self.get_raw_version_string())
        except Exception as e:
            logger.debug(f"Version lookup for {self._pretty_name} failed: {e}")
            return UNKNOWN_VERSION

    def _new_builder(self) -> DriverSessionConfig:
        return DriverSessionConfig(self._descriptor.selenium_name)

    @abstractmethod
    def get_selenium_driver_builder(self) -> DriverSessionConfig:
        """
        Returns the preconfigured builder used by get_selenium_driver().

        Useful when the session needs extra customisation (e.g. a different
        proxy) before it is started with build().
        """

    async def get_selenium_driver(self) -> WebDriver:
        """
        Starts a driver session for this browser.

        Builder errors surface when the coroutine is awaited, never when it
        is created.
        """
        try:
            builder = self.get_selenium_driver_builder()
            result = await asyncio.to_thread(builder.build)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Failed to start a {self._pretty_name} driver session: {e}", exc_info=True)
            raise
        return result

    def get_executable_path(self) -> Optional[str]:
        return None

    def get_release_name(self) -> Optional[str]:
        return None

    def to_info(self) -> BrowserInfo:
        return BrowserInfo(
            browser_id=self.get_id(),
            pretty_name=self.get_pretty_name(),
            release=self.get_release_name(),
            version=self.get_version_number(),
            raw_version=self.get_raw_version_string(),
            executable_path=self.get_executable_path(),
            valid=self.is_valid(),
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._pretty_name!r}>"
