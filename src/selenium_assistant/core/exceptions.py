class SeleniumAssistantError(Exception):
    """Base class for errors raised by selenium_assistant."""


class BrowserConfigurationError(SeleniumAssistantError, ValueError):
    """A browser was constructed with an invalid release or descriptor."""


class UnsupportedPlatformError(SeleniumAssistantError, RuntimeError):
    """Local browser discovery was requested on a host OS it does not support."""

    def __init__(self, platform: str):
        super().__init__(f"Sorry, local browser discovery only supports macOS and Linux (got '{platform}').")
        self.platform = platform


class SessionTeardownError(SeleniumAssistantError):
    """A driver handle was passed to teardown without a usable quit() method."""
