import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "errline"
FILE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the "errline" logger.

    Everything at DEBUG goes to `log_file` when one is given. With `verbose`,
    DEBUG records are also shown on stderr through rich.
    Calling this again replaces the handlers from the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if verbose:
        console_handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        console_handler.setLevel(logging.DEBUG)
        logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.warning("cannot open log file %s: %s", log_file, e)
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
