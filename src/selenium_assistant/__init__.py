"""
selenium_assistant finds browsers on a machine (or on the Sauce Labs grid)
and hands out Selenium driver sessions for them.

    registry = BrowserRegistry(AssistantSettings.from_config_loader())
    for browser in registry.list_valid_local_browsers():
        print(browser.get_pretty_name(), browser.get_version_number())
"""

from .core.config_loader import ConfigLoader
from .core.browser_manager import DriverSessionConfig, SessionLifecycleManager, kill_session
from .core.browsers import (
    BrowserDescriptor,
    BrowserEntity,
    BrowserRegistry,
    KNOWN_DESCRIPTORS,
    LocalBrowser,
    RELEASES,
    RemoteBrowser,
    UNKNOWN_VERSION,
)
from .core.exceptions import (
    BrowserConfigurationError,
    SeleniumAssistantError,
    SessionTeardownError,
    UnsupportedPlatformError,
)
from .data_models import AssistantSettings, BrowserInfo, DriverSettings, RemoteGridOptions

__version__ = "0.4.0"

__all__ = [
    "AssistantSettings",
    "BrowserConfigurationError",
    "BrowserDescriptor",
    "BrowserEntity",
    "BrowserInfo",
    "BrowserRegistry",
    "ConfigLoader",
    "DriverSessionConfig",
    "DriverSettings",
    "KNOWN_DESCRIPTORS",
    "LocalBrowser",
    "RELEASES",
    "RemoteBrowser",
    "RemoteGridOptions",
    "SeleniumAssistantError",
    "SessionLifecycleManager",
    "SessionTeardownError",
    "UNKNOWN_VERSION",
    "UnsupportedPlatformError",
    "kill_session",
]
