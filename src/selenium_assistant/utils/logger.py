import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.config_loader import ConfigLoader, PROJECT_ROOT

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/selenium_assistant.log'


def _level(name: Any, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def _build_file_handler(config: Dict[str, Any], level: int, fmt: str) -> Optional[logging.Handler]:
    log_file_path = Path(config.get('path', DEFAULT_LOG_FILE))
    if not log_file_path.is_absolute():
        log_file_path = PROJECT_ROOT / log_file_path
    try:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Error: cannot create log directory {log_file_path.parent}; file logging disabled. {e}", file=sys.stderr)
        return None

    backup_count = int(config.get('backup_count', 5))
    rotation_type = config.get('rotation_type')  # 'size', 'time' or None
    if rotation_type == 'size':
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=int(config.get('max_bytes', 5 * 1024 * 1024)),
            backupCount=backup_count, encoding='utf-8',
        )
    elif rotation_type == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file_path, when=config.get('when', 'midnight'), interval=int(config.get('interval', 1)),
            backupCount=backup_count, encoding='utf-8',
        )
    else:
        handler = logging.FileHandler(log_file_path, encoding='utf-8')

    handler.setLevel(_level(config.get('level'), level))
    handler.setFormatter(logging.Formatter(config.get('format', fmt)))
    return handler


def setup_logger(config_loader: Optional[ConfigLoader] = None, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configures a logger (the root logger by default) from the `logging` settings block.

    Call once at startup; calling again replaces the handlers instead of adding more.
    Browser probes log at DEBUG, so set `logging.level` to DEBUG to see why a
    browser was rejected.
    """
    config_loader = config_loader or ConfigLoader()

    level = _level(config_loader.get_logging_setting('level', 'INFO'), logging.INFO)
    fmt = config_loader.get_logging_setting('format', DEFAULT_LOG_FORMAT)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if logger_name is not None:
        logger.propagate = bool(config_loader.get_logging_setting('propagate', False))

    console_config = config_loader.get_logging_setting('console_handler', {}) or {}
    if console_config.get('enabled', True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_level(console_config.get('level'), level))
        console_handler.setFormatter(logging.Formatter(console_config.get('format', fmt)))
        logger.addHandler(console_handler)

    file_config = config_loader.get_logging_setting('file_handler', {}) or {}
    if file_config.get('enabled', False):
        file_handler = _build_file_handler(file_config, level, fmt)
        if file_handler is not None:
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
