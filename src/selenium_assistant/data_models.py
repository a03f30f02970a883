import sys
from pathlib import Path
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, Field

from .core.config_loader import ConfigLoader


def get_default_install_dir(platform: str = sys.platform) -> Path:
    """`~/.selenium-assistant` on macOS/Linux, `~/selenium-assistant` on Windows."""
    folder = 'selenium-assistant' if platform.startswith('win') else '.selenium-assistant'
    return Path.home() / folder


class RemoteGridOptions(BaseModel):
    username: Optional[str] = Field(None, description="Sauce Labs username.")
    access_key: Optional[str] = Field(None, description="Sauce Labs access key.")
    host: str = Field("ondemand.saucelabs.com", description="Grid host name.")
    port: int = 443
    tunnel_identifier: Optional[str] = Field(None, description="Sauce Connect tunnel to route the session through.")
    platform_name: Optional[str] = Field(None, description="Grid platform, e.g. 'Windows 10' or 'macOS 13'.")
    extra_capabilities: Dict[str, Any] = Field(default_factory=dict, description="Merged into 'sauce:options'.")

    def has_credentials(self) -> bool:
        return bool(self.username and self.username.strip() and self.access_key and self.access_key.strip())

    @property
    def command_executor(self) -> str:
        return f"https://{self.host}:{self.port}/wd/hub"


class DriverSettings(BaseModel):
    headless: bool = False
    window_size: Optional[str] = Field(None, description="e.g. '1280,800'")
    proxy: Optional[str] = Field(None, description="Proxy URL, '${ENV}' interpolation or 'pool:<name>'.")
    proxy_pools: Dict[str, List[str]] = Field(default_factory=dict)
    driver_options: List[str] = Field(default_factory=list, description="Extra command-line arguments for every local browser.")
    driver_paths: Dict[str, str] = Field(default_factory=dict, description="Browser id -> driver executable (chromedriver, geckodriver, ...).")
    service_args: Dict[str, List[str]] = Field(default_factory=dict, description="Browser id -> driver service arguments.")
    webdriver_manager_ssl_verify: Optional[bool] = Field(None, description="Set WDM_SSL_VERIFY for driver downloads.")


class AssistantSettings(BaseModel):
    install_dir: Optional[Path] = Field(None, description="Where downloaded browsers live. Defaults per platform.")
    saucelabs: RemoteGridOptions = Field(default_factory=RemoteGridOptions)
    driver: DriverSettings = Field(default_factory=DriverSettings)
    blacklist: Dict[str, Dict[int, str]] = Field(default_factory=dict, description="Browser id -> {major version: reason}.")
    min_versions: Dict[str, int] = Field(default_factory=dict, description="Browser id -> minimum supported major version.")
    kill_grace_period_seconds: float = 2.0
    kill_settle_period_seconds: float = 2.0
    version_probe_timeout_seconds: float = 10.0

    def resolved_install_dir(self, platform: str = sys.platform) -> Path:
        if self.install_dir:
            return Path(self.install_dir).expanduser()
        return get_default_install_dir(platform)

    @classmethod
    def from_config_loader(cls, config_loader: Optional[ConfigLoader] = None) -> "AssistantSettings":
        config_loader = config_loader if config_loader else ConfigLoader()
        block = config_loader.get_setting('selenium_assistant', {}) or {}
        return cls.model_validate(block)


class BrowserInfo(BaseModel):
    browser_id: str
    pretty_name: str
    release: Optional[str] = None
    version: int = -1
    raw_version: Optional[str] = None
    executable_path: Optional[str] = None
    valid: bool = False
