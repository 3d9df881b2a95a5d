"""In-memory servicedb fake served through httpx.MockTransport."""

from __future__ import annotations

import json
import re
from datetime import date
from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple

import httpx

REVIEW_PATH = re.compile(r"^/api/reviews/(\d+)$")
USER_PATH = re.compile(r"^/api/users/(\d+)$")
FILM_PATH = re.compile(r"^/api/films/(\d+)$")

TODAY = date(2024, 5, 17)


def review_payload(**overrides) -> dict:
    body = {
        "rating": 8,
        "reviewText": "Great film",
        "user": {"id": 1},
        "film": {"id": 2},
    }
    body.update(overrides)
    return body


class FakeServiceDb:
    def __init__(self) -> None:
        self.reviews: Dict[int, dict] = {}
        self.users: Set[int] = {1}
        self.films: Set[int] = {2}
        self.requests: List[Tuple[str, str]] = []
        self.headers: List[httpx.Headers] = []
        self.failures: Dict[str, int] = {}
        self.empty_list = False
        self.transport_error = False
        # awaited after reading, before answering GET /api/reviews/{id}
        self.read_gate: Optional[Callable[[int], Awaitable[None]]] = None
        self._next_id = 1

    def add_review(self, likes: int = 0, dislikes: int = 0,
                   **overrides) -> int:
        review_id = self._next_id
        self._next_id += 1
        self.reviews[review_id] = {
            "id": review_id,
            "numberOfLikes": likes,
            "numberOfDislikes": dislikes,
            "publicationDate": "2024-01-01",
            **review_payload(**overrides),
        }
        return review_id

    def writes(self) -> List[Tuple[str, str]]:
        return [(m, p) for m, p in self.requests if m != "GET"]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.requests.append((method, path))
        self.headers.append(request.headers)

        if self.transport_error:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.failures:
            return httpx.Response(self.failures[path])

        if path == "/api/reviews":
            return self._collection(method, request)

        match = REVIEW_PATH.match(path)
        if match:
            review_id = int(match.group(1))
            response = self._item(method, review_id, request)
            # gate after the snapshot so concurrent readers see the same state
            if method == "GET" and self.read_gate is not None:
                await self.read_gate(review_id)
            return response

        for pattern, known in ((USER_PATH, self.users),
                               (FILM_PATH, self.films)):
            match = pattern.match(path)
            if match:
                ref_id = int(match.group(1))
                if ref_id not in known:
                    return httpx.Response(404)
                return httpx.Response(200, json={"id": ref_id})

        return httpx.Response(404)

    def _collection(self, method: str,
                    request: httpx.Request) -> httpx.Response:
        if method == "GET":
            if self.empty_list:
                return httpx.Response(200)
            return httpx.Response(200, json=list(self.reviews.values()))
        body = json.loads(request.content)
        body["id"] = self._next_id
        self._next_id += 1
        self.reviews[body["id"]] = body
        return httpx.Response(200, json=body)

    def _item(self, method: str, review_id: int,
              request: httpx.Request) -> httpx.Response:
        if review_id not in self.reviews:
            return httpx.Response(404)
        if method == "GET":
            return httpx.Response(200, json=self.reviews[review_id])
        if method == "PUT":
            body = json.loads(request.content)
            body["id"] = review_id
            self.reviews[review_id] = body
            return httpx.Response(200)
        del self.reviews[review_id]
        return httpx.Response(204)
