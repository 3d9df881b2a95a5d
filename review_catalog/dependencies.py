from fastapi import Depends

from review_catalog.clients.servicedb import ServiceDbClient, get_client
from review_catalog.services.review_catalog_service import (
    ReviewCatalogService,
)


async def get_servicedb() -> ServiceDbClient:
    return await get_client()


async def get_review_catalog_service(
        db: ServiceDbClient = Depends(get_servicedb),
) -> ReviewCatalogService:
    return ReviewCatalogService(db)
