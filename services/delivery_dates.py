import logging
import time
from datetime import date, datetime, timedelta

from services.florist_one import FloristOneClient
from utils.cache import DeliveryDateCache

MOCK_DELIVERY_DAYS = 14
VENDOR_DATE_FORMAT = "%m/%d/%Y"


def normalize_vendor_date(raw: str) -> date:
    """The vendor lists dates as MM/DD/YYYY; ISO dates pass through."""
    raw = raw.strip()
    try:
        return datetime.strptime(raw, VENDOR_DATE_FORMAT).date()
    except ValueError:
        return date.fromisoformat(raw)


def describe(day: date) -> dict:
    return {
        "date": day.isoformat(),
        "description": day.strftime("%A"),
        "available": True,
    }


def generate_mock_delivery_dates(today: date | None = None) -> list[dict]:
    """Two weeks starting today; no Sunday delivery."""
    today = today or date.today()
    dates = []
    for offset in range(MOCK_DELIVERY_DAYS):
        day = today + timedelta(days=offset)
        entry = describe(day)
        entry["available"] = day.weekday() != 6
        dates.append(entry)
    return dates


class DeliveryDateService:

    @staticmethod
    async def get_delivery_dates(
        zip_code: str,
        client: FloristOneClient | None,
        cache: DeliveryDateCache,
        today: date | None = None
    ) -> dict:
        """
        Delivery dates for a ZIP, read through the delivery-date cache.

        Without vendor credentials a generated schedule is returned and not
        cached.
        """
        cached = await cache.get(zip_code)
        if isinstance(cached, dict) and "dates" in cached:
            return {"dates": cached["dates"], "fromCache": True, "zip": zip_code}

        if client is None:
            return {
                "dates": generate_mock_delivery_dates(today),
                "fromCache": False,
                "mock": True,
                "zip": zip_code,
            }

        raw_dates = await client.get_delivery_dates(zip_code)
        dates = []
        for raw in raw_dates:
            try:
                dates.append(describe(normalize_vendor_date(raw)))
            except ValueError:
                logging.warning(f"Skipping unparseable vendor delivery date {raw!r} for zip {zip_code}")

        await cache.set(zip_code, {"dates": dates, "fetchedAt": int(time.time() * 1000)})
        return {"dates": dates, "fromCache": False, "zip": zip_code}
