"""
Unit Tests: Delivery Dates

Tests for services/delivery_dates.py covering:
- vendor date normalization (MM/DD/YYYY and ISO)
- read-through caching per ZIP
- mock schedule without vendor credentials (never cached)
- cache failures fall through to the vendor
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from services.delivery_dates import (
    DeliveryDateService,
    generate_mock_delivery_dates,
    normalize_vendor_date,
)
from utils.cache import DeliveryDateCache, InMemoryCacheStore


@pytest.fixture
def cache():
    return DeliveryDateCache(InMemoryCacheStore(), ttl_seconds=1200)


class TestNormalization:

    def test_vendor_format(self):
        assert normalize_vendor_date("06/14/2025") == date(2025, 6, 14)

    def test_iso_passes_through(self):
        assert normalize_vendor_date(" 2025-06-14 ") == date(2025, 6, 14)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            normalize_vendor_date("tomorrow")


class TestMockSchedule:

    def test_two_weeks_without_sundays(self):
        # 2025-06-09 is a Monday
        dates = generate_mock_delivery_dates(date(2025, 6, 9))

        assert len(dates) == 14
        assert dates[0] == {"date": "2025-06-09", "description": "Monday", "available": True}
        assert [d["date"] for d in dates if not d["available"]] == ["2025-06-15", "2025-06-22"]


class TestDeliveryDateService:

    @pytest.mark.asyncio
    async def test_vendor_dates_fetched_then_cached(self, fake_vendor, cache):
        first = await DeliveryDateService.get_delivery_dates("10001", fake_vendor, cache)
        second = await DeliveryDateService.get_delivery_dates("10001", fake_vendor, cache)

        assert first["fromCache"] is False
        assert [d["date"] for d in first["dates"]] == ["2025-06-13", "2025-06-14"]
        assert first["dates"][0]["description"] == "Friday"
        assert second == {"dates": first["dates"], "fromCache": True, "zip": "10001"}
        assert fake_vendor.calls_to("get_delivery_dates") == [("get_delivery_dates", "10001")]

    @pytest.mark.asyncio
    async def test_cache_is_per_zip(self, fake_vendor, cache):
        await DeliveryDateService.get_delivery_dates("10001", fake_vendor, cache)
        await DeliveryDateService.get_delivery_dates("94105", fake_vendor, cache)

        assert len(fake_vendor.calls_to("get_delivery_dates")) == 2

    @pytest.mark.asyncio
    async def test_unparseable_vendor_dates_skipped(self, fake_vendor, cache):
        fake_vendor.get_delivery_dates = AsyncMock(return_value=["06/14/2025", "soon"])

        result = await DeliveryDateService.get_delivery_dates("10001", fake_vendor, cache)

        assert [d["date"] for d in result["dates"]] == ["2025-06-14"]

    @pytest.mark.asyncio
    async def test_mock_schedule_not_cached(self, cache):
        result = await DeliveryDateService.get_delivery_dates("10001", None, cache, today=date(2025, 6, 9))

        assert result["mock"] is True
        assert result["fromCache"] is False
        assert await cache.get("10001") is None

    @pytest.mark.asyncio
    async def test_broken_cache_falls_through_to_vendor(self, fake_vendor):
        store = MagicMock()
        store.get = AsyncMock(side_effect=ConnectionError("redis down"))
        store.set = AsyncMock(side_effect=ConnectionError("redis down"))

        result = await DeliveryDateService.get_delivery_dates("10001", fake_vendor, DeliveryDateCache(store))

        assert result["fromCache"] is False
        assert len(result["dates"]) == 2
