import logging
import sys

logger = logging.getLogger("learn_note")

formatter = logging.Formatter(
    fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
)


def setup_logging(settings) -> logging.Logger:
    """Attach the stream (and optional file) handlers to the package logger.

    Safe to call more than once; handlers are replaced, not stacked.
    """
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers = [stream_handler]

    if settings.LOG_FILE:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logger.handlers = handlers
    logger.setLevel(getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))
    return logger
