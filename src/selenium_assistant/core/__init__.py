# This file makes selenium_assistant.core a package and exposes key classes.

from .config_loader import ConfigLoader
from .browser_manager import DriverSessionConfig, SessionLifecycleManager, kill_session
from .browsers import BrowserRegistry, LocalBrowser, RemoteBrowser

__all__ = [
    "BrowserRegistry",
    "ConfigLoader",
    "DriverSessionConfig",
    "LocalBrowser",
    "RemoteBrowser",
    "SessionLifecycleManager",
    "kill_session",
]
