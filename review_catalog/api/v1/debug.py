from http import HTTPStatus
from fastapi import APIRouter
from review_catalog.core.config import settings

router = APIRouter(tags=["debug"])


@router.get("/__sentry-test", status_code=HTTPStatus.NO_CONTENT)
async def sentry_test():
    import sentry_sdk
    sentry_sdk.capture_message(f"Sentry test ping from {settings.app_name}")
    return None


def include_debug_routes(app) -> bool:
    # mounted only when explicitly enabled
    if settings.sentry_test_enabled:
        app.include_router(router)
        return True
    return False
