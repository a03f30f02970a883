"""
Browser manager package.

Public API:
- DriverSessionConfig: Builder that turns Selenium options into a live WebDriver.
- SessionLifecycleManager / kill_session: Bounded-time driver teardown.
"""

from .lifecycle import SessionLifecycleManager, kill_session
from .session import DriverSessionConfig

__all__ = ["DriverSessionConfig", "SessionLifecycleManager", "kill_session"]
