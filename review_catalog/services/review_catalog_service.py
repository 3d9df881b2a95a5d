"""Review catalog: validation and orchestration over servicedb."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from review_catalog.clients.servicedb import (
    NotFound,
    ServiceDbClient,
    UpstreamResult,
    unwrap,
)
from review_catalog.models.reviews import Review
from review_catalog.services.errors import (
    NotFoundError,
    UpstreamFailure,
    ValidationError,
)

log = logging.getLogger(__name__)

REVIEWS_PATH = '/api/reviews'
USERS_PATH = '/api/users'
FILMS_PATH = '/api/films'

MIN_RATING = 1
MAX_RATING = 10

LIKES = 'number_of_likes'
DISLIKES = 'number_of_dislikes'


class ReviewCatalogService:  # noqa: WPS214 (methods count)
    """Business rules for reviews; servicedb is the only storage.

    Holds no state of its own. Every mutation is a full read-then-write
    against servicedb with no concurrency token, so concurrent writers
    on one review resolve as last-write-wins.
    """

    def __init__(
            self,
            db: ServiceDbClient,
            today: Callable[[], date] = date.today) -> None:
        """Initialize with servicedb client and a clock for defaults."""
        self.db = db
        self.today = today

    # ---------- helpers ----------

    @staticmethod
    def _review_path(review_id: int) -> str:
        return f'{REVIEWS_PATH}/{review_id}'

    @staticmethod
    def validate_review(review: Review) -> None:
        """Check field rules in fixed order; raise on the first violation."""
        if review.rating < MIN_RATING or review.rating > MAX_RATING:
            log.warning(
                'review_validation_failed',
                extra={'rule': 'rating', 'rating': review.rating})
            raise ValidationError('Rating must be between 1 and 10')
        if review.user is None or review.user.id is None:
            log.warning('review_validation_failed', extra={'rule': 'user'})
            raise ValidationError('User ID is required')
        if review.film is None or review.film.id is None:
            log.warning('review_validation_failed', extra={'rule': 'film'})
            raise ValidationError('Film ID is required')
        if review.review_text is None or not review.review_text.strip():
            log.warning('review_validation_failed', extra={'rule': 'text'})
            raise ValidationError('Review text is required')

    async def _verify_exists(self, path: str, kind: str, ref_id: int) -> None:
        result = await self.db.get(f'{path}/{ref_id}')
        if isinstance(result, NotFound):
            log.warning(f'{kind}_not_found', extra={f'{kind}_id': ref_id})
            raise ValidationError(
                f'{kind.capitalize()} with ID {ref_id} not found')
        unwrap(result)

    async def _verify_references(self, review: Review) -> None:
        await self._verify_exists(USERS_PATH, 'user', review.user.id)
        await self._verify_exists(FILMS_PATH, 'film', review.film.id)

    async def _require_review(self, review_id: int, action: str) -> Review:
        review = await self.get_review(review_id)
        if review is None:
            log.warning(
                'review_not_found',
                extra={'review_id': review_id, 'action': action})
            raise NotFoundError(f'Review not found with ID: {review_id}')
        return review

    async def _write_and_refetch(
            self,
            review_id: int,
            review: Review) -> Review:
        """PUT the full review, then read back what servicedb stored."""
        unwrap(await self.db.put(
            self._review_path(review_id), review.to_wire()))
        return await self._require_review(review_id, 'refetch')

    @staticmethod
    def _to_review(result: UpstreamResult) -> Optional[Review]:
        body = unwrap(result)
        if body is None:
            return None
        return Review.model_validate(body)

    # ---------- LIST ----------

    async def list_reviews(self) -> List[Review]:
        """Fetch all reviews; empty upstream body gives an empty list."""
        log.info('reviews_list')
        body = unwrap(await self.db.get(REVIEWS_PATH)) or []
        reviews = [Review.model_validate(item) for item in body]
        log.debug('reviews_listed', extra={'count': len(reviews)})
        return reviews

    # ---------- GET ONE ----------

    async def get_review(self, review_id: int) -> Optional[Review]:
        """Return review or None if servicedb reports not-found."""
        result = await self.db.get(self._review_path(review_id))
        if isinstance(result, NotFound):
            return None
        return self._to_review(result)

    # ---------- CREATE ----------

    async def create_review(self, review: Review) -> Review:
        """Validate, check user and film, default the date, submit."""
        self.validate_review(review)
        log.info('review_create', extra={'film_id': review.film.id})
        await self._verify_references(review)

        if review.publication_date is None:
            review = review.model_copy(
                update={'publication_date': self.today()})

        created = self._to_review(
            await self.db.post(REVIEWS_PATH, review.to_wire()))
        if created is None:
            raise UpstreamFailure('servicedb returned no body on create')
        log.info('review_created', extra={'review_id': created.id})
        return created

    # ---------- UPDATE ----------

    async def update_review(self, review_id: int, details: Review) -> Review:
        """Replace the stored review with ``details`` and return it."""
        log.info('review_update', extra={'review_id': review_id})
        self.validate_review(details)
        await self._require_review(review_id, 'update')
        await self._verify_references(details)
        return await self._write_and_refetch(review_id, details)

    # ---------- DELETE ----------

    async def delete_review(self, review_id: int) -> None:
        """Delete review by id."""
        log.info('review_delete', extra={'review_id': review_id})
        result = await self.db.delete(self._review_path(review_id))
        if isinstance(result, NotFound):
            log.warning(
                'review_not_found',
                extra={'review_id': review_id, 'action': 'delete'})
            raise NotFoundError(f'Review not found with ID: {review_id}')
        unwrap(result)

    # ---------- LIKE / DISLIKE ----------

    async def _increment(self, review_id: int, field: str) -> Review:
        # read-increment-write, no compare-and-swap: see class docstring
        review = await self._require_review(review_id, field)
        bumped = review.model_copy(
            update={field: getattr(review, field) + 1})
        updated = await self._write_and_refetch(review_id, bumped)
        log.info(
            'review_reaction_added',
            extra={'review_id': review_id, field: getattr(updated, field)})
        return updated

    async def add_like(self, review_id: int) -> Review:
        """Increment ``numberOfLikes`` by one."""
        return await self._increment(review_id, LIKES)

    async def add_dislike(self, review_id: int) -> Review:
        """Increment ``numberOfDislikes`` by one."""
        return await self._increment(review_id, DISLIKES)
