from http import HTTPStatus
import pytest
from fastapi import Response
from review_catalog.api.http_utils import (
    handle_service_errors, not_found_if_none,
)
from review_catalog.services.errors import (
    NotFoundError, UpstreamFailure, ValidationError,
)


def test_not_found_if_none_returns_empty_404():
    resp = not_found_if_none(None)
    assert isinstance(resp, Response)
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.body == b""


def test_not_found_if_none_passes_value_through():
    assert not_found_if_none("x") == "x"


async def test_handle_service_errors_maps_known_error():
    @handle_service_errors({ValidationError: HTTPStatus.BAD_REQUEST,
                            NotFoundError: HTTPStatus.NOT_FOUND})
    async def fn():
        raise NotFoundError("gone")
    resp = await fn()
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.body == b""


async def test_handle_service_errors_leaves_unmapped_errors():
    @handle_service_errors({ValidationError: HTTPStatus.BAD_REQUEST})
    async def fn():
        raise UpstreamFailure("boom", status=502)
    with pytest.raises(UpstreamFailure):
        await fn()


async def test_handle_service_errors_does_not_map_not_found_on_create():
    @handle_service_errors({ValidationError: HTTPStatus.BAD_REQUEST})
    async def fn():
        raise NotFoundError("x")
    with pytest.raises(NotFoundError):
        await fn()


async def test_handle_service_errors_happy_path_returns_value():
    @handle_service_errors({ValidationError: HTTPStatus.BAD_REQUEST})
    async def ok():
        return "ok"
    assert await ok() == "ok"
