import asyncio
import logging
from pathlib import Path
from typing import Optional, List, Any, Iterable

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver

from .constants import CHROME, FIREFOX, EDGE, SAFARI
from .drivers import (
    init_chrome_driver,
    init_firefox_driver,
    init_edge_driver,
    init_safari_driver,
    init_remote_driver,
)
from .options import new_options, apply_headless, apply_proxy, apply_binary_location, apply_window_size

logger = logging.getLogger(__name__)


class DriverSessionConfig:
    """
    Builder for one driver session.

    Accumulates Selenium options and capabilities for a single browser and
    turns them into a live WebDriver with build(). Every setter returns the
    builder so calls can be chained. Create a fresh builder per session.
    """

    def __init__(self, browser_name: str, options: Optional[ArgOptions] = None):
        self.browser_name = browser_name
        self.options: ArgOptions = options if options is not None else new_options(browser_name)
        self.binary_path: Optional[str] = None
        self.driver_path: Optional[str] = None
        self.service_args: List[str] = []
        self.driver_cache_dir: Optional[Path] = None
        self.remote_url: Optional[str] = None
        self.page_load_timeout: Optional[float] = None
        self.script_timeout: Optional[float] = None

    def for_browser(self, browser_name: str) -> "DriverSessionConfig":
        if browser_name != self.browser_name:
            logger.debug(f"Switching builder from {self.browser_name} to {browser_name}; options are reset.")
            self.browser_name = browser_name
            self.options = new_options(browser_name)
        return self

    def set_binary(self, binary_path: str) -> "DriverSessionConfig":
        self.binary_path = binary_path
        if not apply_binary_location(self.options, binary_path):
            logger.debug(f"{self.browser_name} options have no binary location; {binary_path} is not passed to the driver.")
        return self

    def set_headless(self, headless: bool = True) -> "DriverSessionConfig":
        if headless:
            apply_headless(self.options, self.browser_name)
        return self

    def set_window_size(self, window_size: str) -> "DriverSessionConfig":
        apply_window_size(self.options, self.browser_name, window_size)
        return self

    def set_proxy(self, proxy: str) -> "DriverSessionConfig":
        apply_proxy(self.options, self.browser_name, proxy)
        return self

    def add_arguments(self, arguments: Iterable[str]) -> "DriverSessionConfig":
        for argument in arguments:
            self.options.add_argument(argument)
        return self

    def set_capability(self, name: str, value: Any) -> "DriverSessionConfig":
        self.options.set_capability(name, value)
        return self

    def set_browser_version(self, version: str) -> "DriverSessionConfig":
        self.options.browser_version = version
        return self

    def set_driver_path(self, driver_path: Optional[str]) -> "DriverSessionConfig":
        self.driver_path = driver_path
        return self

    def set_service_args(self, service_args: Optional[List[str]]) -> "DriverSessionConfig":
        self.service_args = list(service_args or [])
        return self

    def set_driver_cache_dir(self, cache_dir: Optional[Path]) -> "DriverSessionConfig":
        self.driver_cache_dir = cache_dir
        return self

    def set_timeouts(self, page_load: Optional[float] = None, script: Optional[float] = None) -> "DriverSessionConfig":
        self.page_load_timeout = page_load
        self.script_timeout = script
        return self

    def using_server(self, url: str) -> "DriverSessionConfig":
        self.remote_url = url
        return self

    def get_capabilities(self) -> dict:
        return self.options.to_capabilities()

    def build(self) -> WebDriver:
        """Starts the session. Blocks until the browser (or grid) answers."""
        if self.remote_url:
            driver = init_remote_driver(self.options, command_executor=self.remote_url)
        elif self.browser_name == CHROME:
            driver = init_chrome_driver(
                self.options, configured_path=self.driver_path,
                service_args=self.service_args, cache_dir=self.driver_cache_dir,
            )
        elif self.browser_name == FIREFOX:
            driver = init_firefox_driver(
                self.options, configured_path=self.driver_path,
                service_args=self.service_args, cache_dir=self.driver_cache_dir,
            )
        elif self.browser_name == EDGE:
            driver = init_edge_driver(
                self.options, configured_path=self.driver_path,
                service_args=self.service_args, cache_dir=self.driver_cache_dir,
            )
        elif self.browser_name == SAFARI:
            driver = init_safari_driver(self.options, configured_path=self.driver_path, service_args=self.service_args)
        else:
            raise WebDriverException(f"Unsupported local browser type: {self.browser_name}")

        if self.page_load_timeout is not None:
            driver.set_page_load_timeout(self.page_load_timeout)
        if self.script_timeout is not None:
            driver.set_script_timeout(self.script_timeout)
        logger.info(f"{self.browser_name} WebDriver initialized successfully.")
        return driver

    async def build_async(self) -> WebDriver:
        """Runs build() off the event loop."""
        return await asyncio.to_thread(self.build)
