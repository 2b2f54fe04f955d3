import logging
import sys

LOGGER_NAME = "certsigalg"

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Global verbose flag that can be set by the command line front end
verbose_mode = False


def set_verbose_mode(verbose):
    """Set the global verbose mode flag."""
    global verbose_mode
    verbose_mode = verbose


def _make_handler(level):
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def setup_logger():
    """
    Configure and return the package logger.

    Library modules log through children of this logger
    (`logging.getLogger(__name__)`) and never add handlers themselves.

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Follow the verbosity on every call, even if already set up
    level = logging.DEBUG if verbose_mode else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        logger.addHandler(_make_handler(level))
    elif logger.handlers[0].level != level:
        # Replace the handler that was set up with a different verbosity
        logger.removeHandler(logger.handlers[0])
        logger.addHandler(_make_handler(level))

    return logger


def get_logger():
    """
    Get a logger configured with the application's global verbose setting.

    Returns:
        A configured logger instance
    """
    return setup_logger()
