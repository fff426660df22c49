import sys
from loguru import logger

TIME_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
RECORD_FORMAT = (
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level="INFO", show_time=True, sink=None):
    """Configure loguru for the grid generator.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL),
        case-insensitive.
    show_time : bool
        Whether to prefix records with a timestamp.
    sink : file-like, optional
        Destination for records. Defaults to stderr.

    Raises
    ------
    ValueError
        If the level is unknown. Existing handlers are left in place.
    """
    level = str(level).upper()
    logger.level(level)

    logger.remove()
    log_format = TIME_FORMAT + RECORD_FORMAT if show_time else RECORD_FORMAT
    if sink is None:
        logger.add(sys.stderr, format=log_format, level=level, colorize=True)
    else:
        logger.add(sink, format=log_format, level=level, colorize=False)

    return logger
