"""Request trace id shared by logs, responses and servicedb calls."""

import re
import uuid
from contextvars import ContextVar

TRACE_HEADER = "X-Request-Id"
MAX_TRACE_ID_LENGTH = 128

# ids travel in headers and log fields: keep them short and plain
_TRACE_ID_RE = re.compile(r"^[A-Za-z0-9._:-]+$")

_trace_id: ContextVar[str] = ContextVar("trace_id", default="-")


def get_trace_id() -> str:
    return _trace_id.get()


def set_trace_id(value: str) -> None:
    _trace_id.set(value)


def accept_trace_id(value: str | None) -> str:
    """Return an inbound trace id if usable, otherwise a fresh uuid4."""
    if (value and len(value) <= MAX_TRACE_ID_LENGTH
            and _TRACE_ID_RE.match(value)):
        return value
    return str(uuid.uuid4())
