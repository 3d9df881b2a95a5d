import logging
from functools import wraps
from http import HTTPStatus
from fastapi import Response

from review_catalog.services.errors import NotFoundError, ValidationError

log = logging.getLogger(__name__)

CREATE_ERRORS: dict[type[Exception], HTTPStatus] = {
    ValidationError: HTTPStatus.BAD_REQUEST,
}
UPDATE_ERRORS: dict[type[Exception], HTTPStatus] = {
    ValidationError: HTTPStatus.BAD_REQUEST,
    NotFoundError: HTTPStatus.NOT_FOUND,
}
MISSING_ERRORS: dict[type[Exception], HTTPStatus] = {
    NotFoundError: HTTPStatus.NOT_FOUND,
}


def handle_service_errors(mapping: dict[type[Exception], HTTPStatus]):
    """
    Turn the mapped service exceptions into empty responses with the
    given status. Anything else propagates to the framework.
    Example mapping: {ValidationError: 400, NotFoundError: 404}
    """
    errors = tuple(mapping)

    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except errors as e:
                status = next(code for cls, code in mapping.items()
                              if isinstance(e, cls))
                log.warning(
                    "request_rejected",
                    extra={"status": int(status), "reason": str(e)})
                return Response(status_code=status)
        return wrapper
    return decorator


def not_found_if_none(value):
    """Empty 404 response when the result is None."""
    if value is None:
        return Response(status_code=HTTPStatus.NOT_FOUND)
    return value
