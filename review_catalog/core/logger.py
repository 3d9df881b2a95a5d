"""JSON logging for the catalog.

Records go through a queue so request handlers never block on stdout;
each one carries the trace id of the request that produced it.
"""

import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from pythonjsonlogger import jsonlogger
from review_catalog.core.trace import get_trace_id
from review_catalog.core.config import settings


class TraceContextFilter(logging.Filter):
    """Stamp trace_id, service and env onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        # fields must be set before the record crosses the queue
        record.trace_id = (getattr(record, "trace_id", None)
                           or get_trace_id() or "-")
        record.service = getattr(record, "service", None) or settings.app_name
        record.env = getattr(record, "env", None) or settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = "review_catalog") -> None:
    """Route the root logger to stdout as JSON; repeated calls are no-ops."""
    global _listener

    if _listener is not None:
        return

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s"
        " %(message)s %(pathname)s %(lineno)d "
        "%(trace_id)s %(service)s %(env)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(fmt)
    stream_handler.addFilter(TraceContextFilter())

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    queue_handler.addFilter(TraceContextFilter())

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root.handlers = [queue_handler]

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    # httpx logs every upstream request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "logger_initialized",
        extra={"service": service})


def shutdown_logging() -> None:
    """Stop the queue listener on application shutdown."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
