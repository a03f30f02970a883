import json
import logging
from pathlib import Path
from typing import Dict, Any, Union, Optional

# Project root relative to this file (src/selenium_assistant/core/config_loader.py)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
DEFAULT_SETTINGS_FILE = CONFIG_DIR / 'settings.json'

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigLoader:
    """
    Read-only view over the JSON settings file.

    Two top-level blocks are used: `selenium_assistant` (browser discovery,
    drivers, Sauce Labs) and `logging`. A missing or unreadable file yields
    empty settings, so every lookup falls back to its default.
    """

    def __init__(self, settings_file: Union[str, Path] = DEFAULT_SETTINGS_FILE,
                 settings: Optional[Dict[str, Any]] = None):
        """
        Args:
            settings_file (Union[str, Path], optional): JSON file to read. Defaults to 'config/settings.json'.
            settings (Optional[Dict[str, Any]], optional): Parsed settings to use instead of reading the file.
        """
        self.settings_file: Path = Path(settings_file)
        self.settings: Dict[str, Any] = settings if settings is not None else self._read_settings_file()

        if not self.settings:
            logger.warning(f"No settings loaded from '{self.settings_file}'; defaults apply everywhere.")

    def _read_settings_file(self) -> Dict[str, Any]:
        path = self.settings_file
        if not path.exists():
            logger.debug(f"Settings file {path} does not exist.")
            return {}
        if not path.is_file():
            logger.error(f"Settings path {path} is not a file.")
            return {}

        try:
            with path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Settings file {path} is not valid JSON: {e}")
            return {}
        except OSError as e:
            logger.error(f"Could not read settings file {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Settings file {path} must hold a JSON object, got {type(data).__name__}.")
            return {}
        logger.debug(f"Loaded settings from {path}")
        return data

    def get_settings(self) -> Dict[str, Any]:
        return self.settings

    def get_setting(self, path_str: str, default: Any = None) -> Any:
        """
        Looks up a value by dot-separated path, e.g. "selenium_assistant.saucelabs.username".

        Returns `default` when any step of the path is missing or is not an object.
        """
        node: Any = self.settings
        for key in path_str.split('.'):
            if not isinstance(node, dict):
                logger.warning(f"Setting '{path_str}' stops at '{key}': {type(node).__name__} is not an object.")
                return default
            node = node.get(key, _MISSING)
            if node is _MISSING:
                logger.debug(f"Setting '{path_str}' not set; using {default!r}")
                return default
        return node

    def get_assistant_setting(self, setting_name: str, default: Any = None) -> Any:
        return self.get_setting(f'selenium_assistant.{setting_name}', default)

    def get_logging_setting(self, setting_name: str, default: Any = None) -> Any:
        return self.get_setting(f'logging.{setting_name}', default)
