import logging
import os
from datetime import datetime

PACKAGE_LOGGER = 'lawkit'


def _configure_package_logger():
    """
    Attach handlers to the package logger once per process.

    Console output goes to stderr at LAWKIT_LOG_LEVEL (default WARNING).
    A file handler is only added when LAWKIT_LOG_DIR is set, so the
    analysis core stays free of filesystem side effects by default.
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return package_logger

    level = getattr(logging, os.environ.get('LAWKIT_LOG_LEVEL', 'WARNING').upper(), logging.WARNING)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False

    # Console logs configs
    console_format = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_format)
    package_logger.addHandler(console_handler)

    log_dir = os.environ.get('LAWKIT_LOG_DIR')
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # Configs for how logs will appear in the log dir
        file_format = logging.Formatter(
            '%(levelname)s : %(name)s : %(funcName)s : %(lineno)d : %(message)s'
        )

        log_file = os.path.join(log_dir, f'lawkit_{datetime.now().strftime("%m%d%Y")}')
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_format)
        package_logger.addHandler(file_handler)

    return package_logger


def setup_logger(name):
    """
    Basic Custom Logging formatting and handling

    Parameters
    name (str) : Name of the logger, usually the module's __name__

    Returns:
    logging.Logger : Logger Instance routed through the package handlers
    """

    _configure_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f'{PACKAGE_LOGGER}.{name}'
    return logging.getLogger(name)
