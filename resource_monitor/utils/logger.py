"""
Logger setup module for the Resource Monitor.
Provides functions to configure logging based on external settings.
"""
import os
import logging
import logging.handlers
import tempfile
from typing import Optional, Dict, Tuple

PACKAGE_LOGGER_NAME = 'resource_monitor'
DEFAULT_CONSOLE_LEVEL_NAME = 'WARNING'
DEFAULT_FILE_LEVEL_NAME = 'DEBUG'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_loggers: Dict[str, logging.Logger] = {}


def _get_log_level(level_name: str, default_level: int = logging.INFO) -> int:
    """
    Convert log level string to logging level constant.

    :param level_name: Name of the log level (e.g., 'DEBUG')
    :type level_name: str
    :param default_level: Default level to use if level_name is invalid
    :type default_level: int
    :return: The corresponding logging level constant
    :rtype: int
    """
    level_name_upper = str(level_name).upper()
    level = logging.getLevelName(level_name_upper)
    if isinstance(level, int):
        return level
    else:
        logging.warning(f"Invalid log level name '{level_name}'. Using default level {logging.getLevelName(default_level)}.")
        return default_level


def _check_directory_writable(directory_path: str) -> Tuple[bool, str]:
    """
    Check if a directory exists and is writable by the current process.

    :param directory_path: Path to the directory to check
    :type directory_path: str
    :return: Tuple (is_writable, message)
    :rtype: Tuple[bool, str]
    """
    if not directory_path:
        return False, "Directory path is empty"

    if not os.path.exists(directory_path):
        try:
            os.makedirs(directory_path, exist_ok=True)
        except PermissionError as e:
            return False, f"Permission denied creating directory {directory_path}: {e}"
        except OSError as e:
            return False, f"Error creating directory {directory_path}: {e}"

    if not os.path.isdir(directory_path):
        return False, f"{directory_path} exists but is not a directory"

    if not os.access(directory_path, os.W_OK):
        return False, f"Directory {directory_path} is not writable"
    return True, f"Directory {directory_path} is writable"


def _get_fallback_log_directory() -> str:
    """
    Get a fallback directory for logs that should be writable on most platforms.

    :return: Path to a fallback directory for logging
    :rtype: str
    """
    return os.path.join(tempfile.gettempdir(), "ResourceMonitor", "logs")


def setup_logger(
    name: str = PACKAGE_LOGGER_NAME,
    log_format: str = DEFAULT_LOG_FORMAT,
    console_level_name: str = DEFAULT_CONSOLE_LEVEL_NAME,
    file_level_name: str = DEFAULT_FILE_LEVEL_NAME,
    log_file_path: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> logging.Logger:
    """
    Sets up and configures a logger instance.

    Calling this again for the same name replaces the handlers installed by
    the previous call, so the CLI can reconfigure the package logger after
    modules have already obtained their child loggers.

    :param name: The name for the logger
    :type name: str
    :param log_format: The format string for log messages
    :type log_format: str
    :param console_level_name: Logging level for console output
    :type console_level_name: str
    :param file_level_name: Logging level for file output
    :type file_level_name: str
    :param log_file_path: Path to the log file. If None, file logging is disabled
    :type log_file_path: Optional[str]
    :param max_bytes: Maximum size of the log file before rotation
    :type max_bytes: int
    :param backup_count: Number of backup log files to keep
    :type backup_count: int
    :return: The configured logger instance
    :rtype: logging.Logger
    """
    logger = logging.getLogger(name)
    console_level = _get_log_level(console_level_name, logging.WARNING)
    file_level = _get_log_level(file_level_name, logging.DEBUG)
    lowest_level = min(console_level, file_level) if log_file_path else console_level
    logger.setLevel(lowest_level)

    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    # Always add console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_logging_success = False
    if log_file_path:
        log_dir = os.path.dirname(log_file_path)

        if not log_dir:
            log_file_path = os.path.join(os.getcwd(), os.path.basename(log_file_path))
            log_dir = os.getcwd()

        is_writable, msg = _check_directory_writable(log_dir)
        if not is_writable:
            fallback_dir = _get_fallback_log_directory()
            log_file_path = os.path.join(fallback_dir, os.path.basename(log_file_path))
            logger.warning(f"Cannot use specified log directory: {msg}. Falling back to {log_file_path}")

            is_writable, msg = _check_directory_writable(fallback_dir)
            if not is_writable:
                logger.error(f"Cannot use fallback log directory either: {msg}. File logging will be disabled.")
                log_file_path = None

        try:
            if log_file_path:
                file_handler = logging.handlers.RotatingFileHandler(
                    log_file_path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding='utf-8'
                )
                file_handler.setLevel(file_level)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

                logger.info(f"File logging enabled to: {log_file_path}")
                file_logging_success = True

        except PermissionError as e:
            logger.error(f"Permission denied creating log file {log_file_path}: {e}")
        except OSError as e:
            logger.error(f"Failed to set up file logging to {log_file_path}: {e}", exc_info=True)

        if not file_logging_success:
            logger.warning("File logging requested but could not be set up. Logging to console only.")

    _loggers[name] = logger
    return logger


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance by name.

    Loggers inside the package propagate to the package logger, which is
    set up with default settings the first time any of them is requested.

    :param name: The name of the logger to retrieve
    :type name: str
    :return: The logger instance
    :rtype: logging.Logger
    """
    if PACKAGE_LOGGER_NAME not in _loggers:
        setup_logger(PACKAGE_LOGGER_NAME)

    if name in _loggers:
        return _loggers[name]
    return logging.getLogger(name)
