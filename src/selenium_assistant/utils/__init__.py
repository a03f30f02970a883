# This file makes selenium_assistant.utils a package and exposes key utilities.

from .logger import setup_logger
from .process import capture_stdout
from .proxy_manager import ProxyManager

__all__ = [
    "setup_logger",
    "capture_stdout",
    "ProxyManager",
]
