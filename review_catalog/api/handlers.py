from __future__ import annotations

import logging
from http import HTTPStatus
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app) -> None:
    @app.exception_handler(RequestValidationError)
    async def bad_request_handler(request: Request,
                                  exc: RequestValidationError):
        # unreadable body or non-integer id: same empty 400 as a rule breach
        logger.warning(
            "request_malformed",
            extra={"path": request.url.path,
                   "errors": str(exc.errors())},
        )
        return Response(status_code=HTTPStatus.BAD_REQUEST)
