import logging
from http import HTTPStatus
from typing import List
from fastapi import APIRouter, Body, Depends, Path, Response

from review_catalog.dependencies import get_review_catalog_service
from review_catalog.services.review_catalog_service import (
    ReviewCatalogService,
)
from review_catalog.models.reviews import Review
from review_catalog.api.http_utils import (
    CREATE_ERRORS, MISSING_ERRORS, UPDATE_ERRORS,
    handle_service_errors, not_found_if_none,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Review Catalog API"])

NOT_FOUND = {HTTPStatus.NOT_FOUND.value: {"description": "Review not found"}}
INVALID = {HTTPStatus.BAD_REQUEST.value: {
    "description": "Invalid review data, or user or film not found"}}


@router.get("", response_model=List[Review],
            status_code=HTTPStatus.OK,
            summary="Get all reviews",
            description="Retrieves a list of all reviews")
async def list_reviews(
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    reviews = await svc.list_reviews()
    log.debug("reviews_returned", extra={"count": len(reviews)})
    return reviews


@router.get("/{review_id}", response_model=Review,
            status_code=HTTPStatus.OK,
            summary="Get review by ID",
            description="Retrieves a review by its ID",
            responses=NOT_FOUND)
async def get_review(
    review_id: int = Path(..., description="ID of the review"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    return not_found_if_none(await svc.get_review(review_id))


@router.post("", response_model=Review,
             status_code=HTTPStatus.OK,
             summary="Create a new review",
             description="Creates a new review with rating, text, "
                         "user, and film details",
             responses=INVALID)
@handle_service_errors(CREATE_ERRORS)
async def create_review(
    body: Review = Body(..., description="Review details"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    return await svc.create_review(body)


@router.put("/{review_id}", response_model=Review,
            status_code=HTTPStatus.OK,
            summary="Update a review",
            description="Updates an existing review by its ID",
            responses={**INVALID, **NOT_FOUND})
@handle_service_errors(UPDATE_ERRORS)
async def update_review(
    review_id: int = Path(..., description="ID of the review"),
    body: Review = Body(..., description="Updated review details"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    return await svc.update_review(review_id, body)


@router.delete("/{review_id}",
               status_code=HTTPStatus.NO_CONTENT,
               summary="Delete a review",
               description="Deletes a review by its ID",
               responses=NOT_FOUND)
@handle_service_errors(MISSING_ERRORS)
async def delete_review(
    review_id: int = Path(..., description="ID of the review"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
) -> Response:
    await svc.delete_review(review_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/{review_id}/like", response_model=Review,
             status_code=HTTPStatus.OK,
             summary="Add a like to a review",
             description="Increments the like count for a review by its ID",
             responses=NOT_FOUND)
@handle_service_errors(MISSING_ERRORS)
async def add_like(
    review_id: int = Path(..., description="ID of the review"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    return await svc.add_like(review_id)


@router.post("/{review_id}/dislike", response_model=Review,
             status_code=HTTPStatus.OK,
             summary="Add a dislike to a review",
             description="Increments the dislike count "
                         "for a review by its ID",
             responses=NOT_FOUND)
@handle_service_errors(MISSING_ERRORS)
async def add_dislike(
    review_id: int = Path(..., description="ID of the review"),
    svc: ReviewCatalogService = Depends(get_review_catalog_service),
):
    return await svc.add_dislike(review_id)
