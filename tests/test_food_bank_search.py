"""Tests for synthetic food bank generation and route formatting."""

import random
from datetime import UTC, datetime

from pantrypal.services.directions import build_route, format_eta, strip_html
from pantrypal.services.food_banks import (
    FOOD_BANK_NAMES,
    MockFoodBankSearch,
    offset_miles,
)


def test_generated_food_banks_stay_within_radius() -> None:
    search = MockFoodBankSearch(random.Random(7))

    results = search.search(37.4275, -122.1697)

    assert sorted(bank.name for bank in results) == sorted(FOOD_BANK_NAMES)
    for bank in results:
        assert abs(bank.location.lat - 37.4275) <= 5 / 69
        assert abs(bank.location.lng + 122.1697) <= 5 / 69
        assert bank.vicinity.endswith(" miles from location")


def test_same_seed_gives_same_results() -> None:
    first = MockFoodBankSearch(random.Random(3)).search(40.0, -70.0)
    second = MockFoodBankSearch(random.Random(3)).search(40.0, -70.0)

    assert first == second


def test_offset_miles_scales_longitude_by_latitude() -> None:
    assert offset_miles(0.0, 1.0, 0.0) == 69
    assert offset_miles(60.0, 0.0, 1.0) < 35


def test_format_eta() -> None:
    assert format_eta(datetime(2025, 1, 1, 0, 5, tzinfo=UTC)) == "12:05 AM"
    assert format_eta(datetime(2025, 1, 1, 12, 0, tzinfo=UTC)) == "12:00 PM"
    assert format_eta(datetime(2025, 1, 1, 19, 45, tzinfo=UTC)) == "7:45 PM"


def test_strip_html() -> None:
    assert strip_html('Turn <b>left</b> onto <div class="x">Main St</div>') == (
        "Turn left onto Main St"
    )


def test_build_route_without_routes() -> None:
    now = datetime(2025, 1, 1, tzinfo=UTC)

    assert build_route({"status": "OK", "routes": []}, now) is None
    assert build_route({"status": "NOT_FOUND"}, now) is None
