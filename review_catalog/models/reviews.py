from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityRef(BaseModel):
    """Reference to a user or film; only ``id`` is read."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None


class UserRef(EntityRef):
    pass


class FilmRef(EntityRef):
    pass


class Review(BaseModel):
    # camelCase on the wire, both inbound and towards servicedb
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: Optional[int] = None
    rating: int = 0
    number_of_likes: int = 0
    number_of_dislikes: int = 0
    review_text: Optional[str] = None
    publication_date: Optional[date] = None
    user: Optional[UserRef] = None
    film: Optional[FilmRef] = None

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
