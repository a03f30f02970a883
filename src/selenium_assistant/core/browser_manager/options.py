import logging
from typing import Optional, Iterable
from urllib.parse import urlparse

from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.ie.options import Options as IeOptions
from selenium.webdriver.safari.options import Options as SafariOptions

from .constants import CHROME, FIREFOX, EDGE, SAFARI, INTERNET_EXPLORER, CHROMIUM_BROWSERS

logger = logging.getLogger(__name__)

_OPTIONS_BY_BROWSER = {
    CHROME: ChromeOptions,
    FIREFOX: FirefoxOptions,
    EDGE: EdgeOptions,
    SAFARI: SafariOptions,
    INTERNET_EXPLORER: IeOptions,
}


def new_options(browser_name: str) -> ArgOptions:
    try:
        options_cls = _OPTIONS_BY_BROWSER[browser_name]
    except KeyError:
        raise ValueError(f"No Selenium options class for browser '{browser_name}'") from None
    return options_cls()


def apply_headless(options: ArgOptions, browser_name: str) -> None:
    if browser_name in CHROMIUM_BROWSERS:
        options.add_argument('--headless=new')
        options.add_argument('--disable-gpu')
    elif browser_name == FIREFOX:
        options.add_argument('-headless')
    else:
        logger.warning(f"Headless mode is not supported for {browser_name}; ignoring.")


def apply_proxy(options: ArgOptions, browser_name: str, proxy: str) -> None:
    parsed = urlparse(proxy)
    scheme = parsed.scheme or 'http'
    if browser_name in CHROMIUM_BROWSERS:
        options.add_argument(f"--proxy-server={proxy}")
    elif browser_name == FIREFOX:
        host = parsed.hostname
        port = parsed.port or 0
        if host and port:
            options.set_preference('network.proxy.type', 1)
            if scheme.startswith('socks'):
                options.set_preference('network.proxy.socks', host)
                options.set_preference('network.proxy.socks_port', int(port))
                options.set_preference('network.proxy.socks_version', 4 if scheme == 'socks4' else 5)
            else:
                options.set_preference('network.proxy.http', host)
                options.set_preference('network.proxy.http_port', int(port))
                options.set_preference('network.proxy.ssl', host)
                options.set_preference('network.proxy.ssl_port', int(port))
        else:
            logger.warning(f"Proxy URL appears invalid for Firefox prefs: {proxy}")
    else:
        logger.warning(f"Proxy configuration is not supported for {browser_name}; ignoring {proxy}.")


def apply_window_size(options: ArgOptions, browser_name: str, window_size: str) -> None:
    """Accepts "W,H" or "WxH"."""
    if browser_name in CHROMIUM_BROWSERS:
        options.add_argument(f"--window-size={window_size}")
    elif browser_name == FIREFOX:
        width, _, height = window_size.replace('x', ',').partition(',')
        if width.strip() and height.strip():
            options.add_argument(f"--width={width.strip()}")
            options.add_argument(f"--height={height.strip()}")
        else:
            logger.warning(f"Window size {window_size!r} is not WIDTH,HEIGHT; ignoring for Firefox.")
    else:
        logger.warning(f"Window size is not supported for {browser_name}; ignoring.")


def apply_binary_location(options: ArgOptions, binary_path: str) -> bool:
    """Points the options at a specific browser binary. Returns False if the options can't carry one."""
    if hasattr(type(options), 'binary_location'):
        options.binary_location = binary_path
        return True
    return False


def configure_driver_options(
    options: ArgOptions,
    browser_name: str,
    *,
    headless: bool,
    window_size: Optional[str],
    proxy: Optional[str],
    additional_options: Optional[Iterable[str]],
) -> ArgOptions:
    if headless:
        apply_headless(options, browser_name)

    if window_size:
        apply_window_size(options, browser_name, window_size)

    if proxy:
        apply_proxy(options, browser_name, proxy)

    if browser_name in CHROMIUM_BROWSERS:
        options.add_argument('--no-first-run')
        options.add_argument('--no-default-browser-check')

    if additional_options is not None:
        for opt in additional_options:
            if isinstance(opt, str):
                options.add_argument(opt)
            else:
                logger.warning(f"Ignoring non-string driver option: {opt}")

    return options
