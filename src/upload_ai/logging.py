import logging
import sys

from pythonjsonlogger import jsonlogger

_UVICORN_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error"]


def setup_logging(level: int = logging.INFO):
    """
    Configures structured JSON logging for the server, the clients and the UI.

    Every record carries timestamp, level, logger name, message and the
    trace_id/span_id injected by ddtrace. The root logger and the uvicorn
    loggers share one stdout handler so request logs and application logs
    come out in the same format.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in _UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = []
        u_logger.addHandler(stream_handler)
        u_logger.propagate = False

    return root_logger
