from fastapi import APIRouter, Depends, Request

from services.delivery_dates import DeliveryDateService
from services.florist_one import FloristOneClient
from utils.cache import DeliveryDateCache
from utils.responses import preflight_response, success_response
from utils.validation import require, validate_zip
from web.dependencies import get_delivery_date_cache, get_location, get_vendor_client

delivery_router = APIRouter(prefix="/api/{state}/{city}", tags=["delivery"])


@delivery_router.api_route("/delivery-dates", methods=["GET", "OPTIONS"])
async def get_delivery_dates(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    client: FloristOneClient | None = Depends(get_vendor_client),
    cache: DeliveryDateCache = Depends(get_delivery_date_cache),
):
    """
    Delivery dates for ?zip=, cached per ZIP for DELIVERY_DATES_CACHE_TTL_SECONDS.

    Returns:
        {dates: [{date, description, available}], fromCache, zip}
    """
    if request.method == "OPTIONS":
        return preflight_response()
    zip_code = require(validate_zip, request.query_params.get("zip"), "zip")
    result = await DeliveryDateService.get_delivery_dates(zip_code, client, cache)
    return success_response(result)
