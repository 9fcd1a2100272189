"""Shared test fixtures."""

import random
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import pytest

from pantrypal.adapters.google_maps_client import GoogleMapsClient
from pantrypal.adapters.mapbox_client import MapboxClient
from pantrypal.adapters.proxy_client import MapsProxyClient
from pantrypal.config import ClientSettings, ProxySettings
from pantrypal.containers import ProxyContainer
from pantrypal.domain.catalog import Ingredient
from pantrypal.domain.geo import Coordinates
from pantrypal.domain.groups import Group, GroupMembership
from pantrypal.domain.lists import ListItem, NewListItem
from pantrypal.domain.preferences import PreferencesRecord
from pantrypal.services.auth import SessionProvider
from pantrypal.services.catalog import CategorizerClient, IngredientRepository
from pantrypal.services.directions import DirectionsService
from pantrypal.services.food_banks import MockFoodBankSearch
from pantrypal.services.groups import GroupRepository, GroupService
from pantrypal.services.lists import ListRepository
from pantrypal.services.locations import DeviceLocator, LocationService
from pantrypal.services.preferences import PreferencesRepository, PreferencesService

USER_ID = "user-1"
FIXED_NOW = datetime(2025, 3, 1, 19, 5, tzinfo=UTC)


def _maybe_fail(fail_on: set[str], operation: str) -> None:
    if operation in fail_on:
        raise RuntimeError(f"{operation} failed")


@dataclass
class InMemoryListRepository(ListRepository):
    """In-memory list repository for tests."""

    rows: list[ListItem] = field(default_factory=list)
    inserted: list[NewListItem] = field(default_factory=list)
    updates: list[tuple[str, str, str]] = field(default_factory=list)
    deletes: list[tuple[str, str]] = field(default_factory=list)
    list_calls: int = 0
    fail_on: set[str] = field(default_factory=set)
    next_id: int = 100

    def list_items(self, user_id: str) -> list[ListItem]:
        _maybe_fail(self.fail_on, "list")
        self.list_calls += 1
        return [row for row in self.rows if row.user_id == user_id]

    def insert_item(self, item: NewListItem) -> ListItem:
        _maybe_fail(self.fail_on, "insert")
        self.inserted.append(item)
        self.next_id += 1
        created = ListItem(
            id=str(self.next_id),
            user_id=item.user_id,
            product_id=item.product_id,
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            description=item.description,
            nutrition=item.nutrition,
            image_url=item.image_url,
        )
        self.rows.append(created)
        return created

    def update_quantity(
        self, item_id: str, user_id: str, quantity: str
    ) -> ListItem | None:
        _maybe_fail(self.fail_on, "update")
        self.updates.append((item_id, user_id, quantity))
        for index, row in enumerate(self.rows):
            if row.id == item_id and row.user_id == user_id:
                self.rows[index] = replace(row, quantity=quantity)
                return self.rows[index]
        return None

    def delete_item(self, item_id: str, user_id: str) -> None:
        _maybe_fail(self.fail_on, "delete")
        self.deletes.append((item_id, user_id))
        self.rows = [
            row
            for row in self.rows
            if not (row.id == item_id and row.user_id == user_id)
        ]


@dataclass
class InMemoryPreferencesRepository(PreferencesRepository):
    """In-memory preferences repository for tests."""

    records: dict[str, PreferencesRecord] = field(default_factory=dict)
    locations: dict[str, object] = field(default_factory=dict)
    inserts: list[PreferencesRecord] = field(default_factory=list)
    updates: list[PreferencesRecord] = field(default_factory=list)
    location_writes: list[tuple[str, Coordinates]] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)

    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        _maybe_fail(self.fail_on, "get")
        return self.records.get(user_id)

    def insert_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        _maybe_fail(self.fail_on, "insert")
        self.inserts.append(record)
        self.records[record.user_id] = record
        return record

    def update_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        _maybe_fail(self.fail_on, "update")
        self.updates.append(record)
        self.records[record.user_id] = record
        return record

    def get_location(self, user_id: str) -> object | None:
        _maybe_fail(self.fail_on, "get_location")
        return self.locations.get(user_id)

    def update_location(self, user_id: str, coordinates: Coordinates) -> None:
        _maybe_fail(self.fail_on, "update_location")
        self.location_writes.append((user_id, coordinates))
        self.locations[user_id] = coordinates.to_dict()


@dataclass
class InMemoryGroupRepository(GroupRepository):
    """In-memory group repository for tests."""

    groups: dict[str, Group] = field(default_factory=dict)
    memberships: list[GroupMembership] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)

    def create_group(self, name: str) -> Group:
        _maybe_fail(self.fail_on, "create_group")
        group = Group(
            id=f"group-{len(self.groups) + 1}",
            name=name,
            created_at="2025-03-01T00:00:00+00:00",
        )
        self.groups[group.id] = group
        return group

    def get_group(self, group_id: str) -> Group | None:
        _maybe_fail(self.fail_on, "get_group")
        return self.groups.get(group_id)

    def list_memberships(self, user_id: str) -> list[GroupMembership]:
        _maybe_fail(self.fail_on, "list_memberships")
        return [m for m in self.memberships if m.user_id == user_id]

    def create_membership(self, group_id: str, user_id: str) -> GroupMembership:
        _maybe_fail(self.fail_on, "create_membership")
        membership = GroupMembership(
            id=f"membership-{len(self.memberships) + 1}",
            group_id=group_id,
            user_id=user_id,
            joined_at="2025-03-01T00:00:00+00:00",
        )
        self.memberships.append(membership)
        return membership

    def list_user_groups(self, user_id: str) -> list[Group]:
        _maybe_fail(self.fail_on, "list_user_groups")
        group_ids = {m.group_id for m in self.memberships if m.user_id == user_id}
        return [group for group in self.groups.values() if group.id in group_ids]


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient catalog for tests."""

    ingredients: list[Ingredient] = field(default_factory=list)
    fail: bool = False

    def list_ingredients(
        self,
        *,
        category: str | None,
        search: str | None,
        limit: int,
        offset: int,
    ) -> list[Ingredient]:
        if self.fail:
            raise RuntimeError("catalog unavailable")
        matches = [
            ingredient
            for ingredient in self.ingredients
            if (category is None or ingredient.category == category)
            and (search is None or search.lower() in ingredient.name.lower())
        ]
        return matches[offset : offset + limit]

    def get_ingredient(self, product_id: str) -> Ingredient | None:
        if self.fail:
            raise RuntimeError("catalog unavailable")
        return next(
            (i for i in self.ingredients if i.product_id == product_id), None
        )


@dataclass
class FakeSessionProvider(SessionProvider):
    """Fake auth provider with a fixed account table."""

    user_id: str | None = USER_ID
    accounts: dict[str, tuple[str, str]] = field(default_factory=dict)
    signed_out: bool = False

    def current_user_id(self) -> str | None:
        return self.user_id

    def sign_in(self, email: str, password: str) -> str:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise RuntimeError("Invalid login credentials")
        self.user_id = account[1]
        return account[1]

    def sign_up(self, email: str, password: str) -> str:
        if email in self.accounts:
            raise RuntimeError("User already registered")
        user_id = f"user-{len(self.accounts) + 2}"
        self.accounts[email] = (password, user_id)
        self.user_id = user_id
        return user_id

    def sign_out(self) -> None:
        self.user_id = None
        self.signed_out = True


@dataclass
class FakeProxyClient(MapsProxyClient):
    """Fake proxy client recording calls and returning canned payloads."""

    geocode_payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": "OK",
            "results": [{"geometry": {"location": {"lat": 37.4419, "lng": -122.143}}}],
        }
    )
    food_bank_payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": "OK",
            "results": [
                {
                    "place_id": "fb_1",
                    "name": "Hope Food Pantry",
                    "vicinity": "2.1 miles from location",
                    "geometry": {"location": {"lat": 37.47, "lng": -122.143}},
                },
                {
                    "place_id": "fb_2",
                    "name": "Community Food Share",
                    "vicinity": "0.3 miles from location",
                    "geometry": {"location": {"lat": 37.445, "lng": -122.143}},
                },
            ],
        }
    )
    directions_payload: dict[str, object] = field(
        default_factory=lambda: {
            "route": {
                "distance": 1609,
                "duration": 300,
                "eta": "7:10 PM",
                "steps": [
                    {"instruction": "Head north", "distance": 1609, "duration": 300}
                ],
            }
        }
    )
    errors: dict[str, Exception] = field(default_factory=dict)
    geocode_calls: list[str] = field(default_factory=list)
    search_calls: list[tuple[float, float]] = field(default_factory=list)

    async def geocode(self, address: str) -> dict[str, object]:
        self.geocode_calls.append(address)
        self._raise("geocode")
        return self.geocode_payload

    async def search_food_banks(self, lat: float, lng: float) -> dict[str, object]:
        self.search_calls.append((lat, lng))
        self._raise("search")
        return self.food_bank_payload

    async def directions(
        self, start_lat: float, start_lng: float, end_lat: float, end_lng: float
    ) -> dict[str, object]:
        self._raise("directions")
        return self.directions_payload

    async def static_map(self, lat: float, lng: float) -> bytes:
        self._raise("static_map")
        return b"\x89PNG"

    def static_map_url(self, lat: float, lng: float) -> str:
        return f"http://proxy.test/api/staticmap?lat={lat}&lng={lng}"

    def _raise(self, operation: str) -> None:
        error = self.errors.get(operation)
        if error is not None:
            raise error


@dataclass
class FakeDeviceLocator(DeviceLocator):
    """Fake device location services."""

    granted: bool = True
    position: Coordinates | None = field(
        default_factory=lambda: Coordinates(lat=37.4275, lng=-122.1697)
    )

    async def request_permission(self) -> bool:
        return self.granted

    async def current_position(self) -> Coordinates | None:
        return self.position


@dataclass
class FakeCategorizerClient(CategorizerClient):
    """Fake categorizer returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"category": "fruit"})
    prompts: list[str] = field(default_factory=list)

    async def classify(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@dataclass
class FakeGoogleMapsClient(GoogleMapsClient):
    """Fake Google Maps client with canned responses."""

    geocode_payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": "OK",
            "results": [{"geometry": {"location": {"lat": 37.4419, "lng": -122.143}}}],
        }
    )
    directions_payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": "OK",
            "routes": [
                {
                    "legs": [
                        {
                            "distance": {"value": 3200},
                            "duration": {"value": 600},
                            "steps": [
                                {
                                    "html_instructions": "Head <b>north</b> on "
                                    "<b>El Camino Real</b>",
                                    "distance": {"value": 2000},
                                    "duration": {"value": 400},
                                },
                                {
                                    "html_instructions": "Turn <b>right</b>",
                                    "distance": {"value": 1200},
                                    "duration": {"value": 200},
                                },
                            ],
                        }
                    ]
                }
            ],
        }
    )
    error: Exception | None = None
    directions_calls: list[tuple[tuple[str, str], tuple[str, str]]] = field(
        default_factory=list
    )

    async def geocode(self, address: str) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        return self.geocode_payload

    async def directions(
        self, origin: tuple[str, str], destination: tuple[str, str]
    ) -> dict[str, object]:
        self.directions_calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        return self.directions_payload


@dataclass
class FakeMapboxClient(MapboxClient):
    """Fake Mapbox client returning static bytes."""

    content: bytes = b"\x89PNG\r\n\x1a\nfake"
    error: Exception | None = None

    async def static_map(self, lat: str, lng: str) -> bytes:
        if self.error is not None:
            raise self.error
        return self.content


def make_item(  # noqa: PLR0913
    item_id: str,
    product_id: str,
    quantity: str = "1",
    *,
    user_id: str = USER_ID,
    name: str = "Apple",
    category: str = "fruit",
) -> ListItem:
    return ListItem(
        id=item_id,
        user_id=user_id,
        product_id=product_id,
        name=name,
        category=category,
        quantity=quantity,
    )


@pytest.fixture
def client_settings() -> ClientSettings:
    return ClientSettings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="header.payload.signature",
        proxy_base_url="http://proxy.test",
        openai_api_key="openai-key",
        device_latitude=37.4275,
        device_longitude=-122.1697,
    )


@pytest.fixture
def proxy_settings() -> ProxySettings:
    return ProxySettings(
        google_places_api_key="google-key",
        mapbox_token="mapbox-token",
    )


@pytest.fixture
def session_provider() -> FakeSessionProvider:
    return FakeSessionProvider()


@pytest.fixture
def preferences_repository() -> InMemoryPreferencesRepository:
    return InMemoryPreferencesRepository()


@pytest.fixture
def preferences_service(
    preferences_repository: InMemoryPreferencesRepository,
) -> PreferencesService:
    return PreferencesService(preferences_repository)


@pytest.fixture
def group_repository() -> InMemoryGroupRepository:
    return InMemoryGroupRepository()


@pytest.fixture
def group_service(
    group_repository: InMemoryGroupRepository,
    preferences_service: PreferencesService,
) -> GroupService:
    return GroupService(group_repository, preferences_service)


@pytest.fixture
def proxy_client() -> FakeProxyClient:
    return FakeProxyClient()


@pytest.fixture
def device_locator() -> FakeDeviceLocator:
    return FakeDeviceLocator()


@pytest.fixture
def location_service(
    session_provider: FakeSessionProvider,
    preferences_repository: InMemoryPreferencesRepository,
    proxy_client: FakeProxyClient,
    device_locator: FakeDeviceLocator,
) -> LocationService:
    return LocationService(
        session_provider=session_provider,
        preferences_repository=preferences_repository,
        proxy_client=proxy_client,
        device_locator=device_locator,
    )


@pytest.fixture
def google_maps_client() -> FakeGoogleMapsClient:
    return FakeGoogleMapsClient()


@pytest.fixture
def mapbox_client() -> FakeMapboxClient:
    return FakeMapboxClient()


@pytest.fixture
def proxy_container(
    proxy_settings: ProxySettings,
    google_maps_client: FakeGoogleMapsClient,
    mapbox_client: FakeMapboxClient,
) -> ProxyContainer:
    async def close_resources() -> None:
        return None

    return ProxyContainer(
        settings=proxy_settings,
        google_maps_client=google_maps_client,
        mapbox_client=mapbox_client,
        food_bank_search=MockFoodBankSearch(random.Random(42)),
        directions_service=DirectionsService(
            maps_client=google_maps_client,
            timezone="UTC",
            clock=lambda: FIXED_NOW,
        ),
        close_resources=close_resources,
    )
