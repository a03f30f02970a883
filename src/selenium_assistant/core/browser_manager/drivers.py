import logging
import shutil
from pathlib import Path
from typing import Optional, List

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.safari.options import Options as SafariOptions
from selenium.webdriver.safari.service import Service as SafariService
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.core.driver_cache import DriverCacheManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

logger = logging.getLogger(__name__)


def _cache_manager(cache_dir: Optional[Path]) -> Optional[DriverCacheManager]:
    if cache_dir is None:
        return None
    return DriverCacheManager(root_dir=str(cache_dir))


def init_chrome_driver(
    options: ChromeOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
    cache_dir: Optional[Path] = None,
) -> WebDriver:
    local_driver = configured_path or shutil.which('chromedriver')
    if local_driver:
        logger.info(f"Using local chromedriver at: {local_driver}")
        service = ChromeService(executable_path=local_driver, service_args=service_args or None)
    else:
        logger.info("Local chromedriver not found. Falling back to webdriver_manager (requires internet).")
        driver_path = ChromeDriverManager(cache_manager=_cache_manager(cache_dir)).install()
        service = ChromeService(driver_path, service_args=service_args or None)
    return webdriver.Chrome(service=service, options=options)


def init_firefox_driver(
    options: FirefoxOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
    cache_dir: Optional[Path] = None,
) -> WebDriver:
    local_driver = configured_path or shutil.which('geckodriver')
    if local_driver:
        logger.info(f"Using local geckodriver at: {local_driver}")
        service = FirefoxService(executable_path=local_driver, service_args=service_args or None)
    else:
        logger.info("Local geckodriver not found. Falling back to webdriver_manager (requires internet).")
        driver_path = GeckoDriverManager(cache_manager=_cache_manager(cache_dir)).install()
        service = FirefoxService(driver_path, service_args=service_args or None)
    return webdriver.Firefox(service=service, options=options)


def init_edge_driver(
    options: EdgeOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
    cache_dir: Optional[Path] = None,
) -> WebDriver:
    local_driver = configured_path or shutil.which('msedgedriver')
    if local_driver:
        logger.info(f"Using local msedgedriver at: {local_driver}")
        service = EdgeService(executable_path=local_driver, service_args=service_args or None)
    else:
        logger.info("Local msedgedriver not found. Falling back to webdriver_manager (requires internet).")
        driver_path = EdgeChromiumDriverManager(cache_manager=_cache_manager(cache_dir)).install()
        service = EdgeService(driver_path, service_args=service_args or None)
    return webdriver.Edge(service=service, options=options)


def init_safari_driver(
    options: SafariOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
) -> WebDriver:
    # safaridriver ships with the OS; there is nothing to download
    if configured_path:
        logger.info(f"Using safaridriver at: {configured_path}")
        service = SafariService(executable_path=configured_path, service_args=service_args or None)
        return webdriver.Safari(service=service, options=options)
    return webdriver.Safari(options=options)


def init_remote_driver(options: ArgOptions, *, command_executor: str) -> WebDriver:
    logger.info(f"Starting remote {options.capabilities.get('browserName')} session on {command_executor.split('@')[-1]}")
    return webdriver.Remote(command_executor=command_executor, options=options)
