import logging

LOGGER_NAME = "backend"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level_name: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger; repeated calls only adjust the level."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    logger.debug("Logger configured level=%s", logging.getLevelName(level))
    return logger
