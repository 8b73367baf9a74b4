import logging


def _level_from_string(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``board`` logger tree with a single stream handler.

    Safe to call repeatedly; existing handlers are replaced rather than
    stacked.  The ``board.sql`` child logger (dev-mode SQL echo) inherits
    the handler.
    """
    logger = logging.getLogger("board")
    logger.setLevel(_level_from_string(level))
    logger.handlers = []

    handler = logging.StreamHandler()
    handler.setLevel(_level_from_string(level))
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(handler)
    return logger
