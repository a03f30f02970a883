import os

# Selenium browserName values
CHROME = 'chrome'
FIREFOX = 'firefox'
EDGE = 'MicrosoftEdge'
SAFARI = 'safari'
INTERNET_EXPLORER = 'internet explorer'

CHROMIUM_BROWSERS = (CHROME, EDGE)

# Quit is raced against the grace period, then the settle period always elapses
DEFAULT_KILL_GRACE_PERIOD_SECONDS = 2.0
DEFAULT_KILL_SETTLE_PERIOD_SECONDS = 2.0

# Environment variable key used by webdriver_manager to control SSL verification
WDM_SSL_VERIFY_ENV = "WDM_SSL_VERIFY"


def set_wdm_ssl_verify(enabled: bool) -> None:
    os.environ[WDM_SSL_VERIFY_ENV] = '1' if enabled else '0'
