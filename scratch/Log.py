import logging

LOGGER_NAME = "luckyscratch"
LOG_PATTERN = "[%(asctime)s] %(levelname)s %(name)s %(message)s"


def setupLogging(level="WARNING"):
    """Attach one console handler to the luckyscratch logger tree."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_PATTERN, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger
