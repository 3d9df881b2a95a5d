"""Errors raised by the catalog service."""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for review catalog errors."""


class ValidationError(CatalogError):
    """Review breaks a field rule or references a missing user/film."""


class NotFoundError(CatalogError):
    """Target review does not exist."""


class UpstreamFailure(CatalogError):
    """Servicedb call failed for any reason other than not-found."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
