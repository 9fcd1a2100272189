"""Dependency container wiring for the app core and the proxy server."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pantrypal.adapters.device_locator import ConfiguredDeviceLocator
from pantrypal.adapters.google_maps_client import (
    GoogleMapsClient,
    HttpxGoogleMapsClient,
)
from pantrypal.adapters.mapbox_client import HttpxMapboxClient, MapboxClient
from pantrypal.adapters.openai_categorizer_client import OpenAICategorizerClient
from pantrypal.adapters.proxy_client import HttpxMapsProxyClient
from pantrypal.adapters.supabase_auth import SupabaseSessionProvider
from pantrypal.adapters.supabase_group_repository import SupabaseGroupRepository
from pantrypal.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from pantrypal.adapters.supabase_list_repository import (
    SupabaseGroceryListRepository,
    SupabaseWishlistRepository,
)
from pantrypal.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from pantrypal.config import ClientSettings, ProxySettings
from pantrypal.domain.preferences import UserPreferences
from pantrypal.services.auth import AuthService, SessionProvider
from pantrypal.services.catalog import CatalogService, FoodCategorizer
from pantrypal.services.directions import DirectionsService
from pantrypal.services.food_banks import MockFoodBankSearch
from pantrypal.services.groups import GroupService
from pantrypal.services.lists import GroceryListStore, WishlistStore
from pantrypal.services.locations import LocationService
from pantrypal.services.onboarding import OnboardingWizard
from pantrypal.services.pickups import PickupService
from pantrypal.services.preferences import PreferencesService


@dataclass
class ClientContainer:
    """Holds the stores and services of one signed-in app session."""

    settings: ClientSettings
    session_provider: SessionProvider
    preferences: UserPreferences
    auth_service: AuthService
    preferences_service: PreferencesService
    grocery_list: GroceryListStore
    wishlist: WishlistStore
    group_service: GroupService
    location_service: LocationService
    pickup_service: PickupService
    catalog_service: CatalogService
    food_categorizer: FoodCategorizer | None
    close_resources: Callable[[], Awaitable[None]]

    def onboarding_wizard(self) -> OnboardingWizard:
        """Start an onboarding flow over the shared preferences draft."""
        return OnboardingWizard(
            session_provider=self.session_provider,
            group_service=self.group_service,
            preferences_service=self.preferences_service,
            draft=self.preferences,
        )


@dataclass
class ProxyContainer:
    """Holds the proxy server's upstream clients and services."""

    settings: ProxySettings
    google_maps_client: GoogleMapsClient
    mapbox_client: MapboxClient
    food_bank_search: MockFoodBankSearch
    directions_service: DirectionsService
    close_resources: Callable[[], Awaitable[None]]


def build_client_container(settings: ClientSettings | None = None) -> ClientContainer:
    """Create the default app core container."""
    resolved_settings = settings or ClientSettings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    session_provider = SupabaseSessionProvider(supabase_client)
    preferences_repository = SupabasePreferencesRepository(supabase_client)
    preferences_service = PreferencesService(preferences_repository)
    preferences = UserPreferences()
    proxy_client = HttpxMapsProxyClient.create(
        resolved_settings.proxy_base_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    device_locator = ConfiguredDeviceLocator(
        permission_granted=resolved_settings.location_permission_granted,
        latitude=resolved_settings.device_latitude,
        longitude=resolved_settings.device_longitude,
    )
    location_service = LocationService(
        session_provider=session_provider,
        preferences_repository=preferences_repository,
        proxy_client=proxy_client,
        device_locator=device_locator,
    )
    categorizer_client = None
    food_categorizer = None
    if resolved_settings.openai_api_key:
        categorizer_client = OpenAICategorizerClient.create(
            resolved_settings.openai_api_key
        )
        food_categorizer = FoodCategorizer(
            client=categorizer_client, model=resolved_settings.openai_model
        )

    async def close_resources() -> None:
        await proxy_client.close()
        if categorizer_client is not None:
            await categorizer_client.close()

    return ClientContainer(
        settings=resolved_settings,
        session_provider=session_provider,
        preferences=preferences,
        auth_service=AuthService(session_provider, preferences_service, preferences),
        preferences_service=preferences_service,
        grocery_list=GroceryListStore(SupabaseGroceryListRepository(supabase_client)),
        wishlist=WishlistStore(SupabaseWishlistRepository(supabase_client)),
        group_service=GroupService(
            SupabaseGroupRepository(supabase_client), preferences_service
        ),
        location_service=location_service,
        pickup_service=PickupService(location_service),
        catalog_service=CatalogService(SupabaseIngredientRepository(supabase_client)),
        food_categorizer=food_categorizer,
        close_resources=close_resources,
    )


def build_proxy_container(settings: ProxySettings | None = None) -> ProxyContainer:
    """Create the default proxy server container."""
    resolved_settings = settings or ProxySettings()
    google_maps_client = HttpxGoogleMapsClient.create(
        api_key=resolved_settings.google_places_api_key,
        base_url=resolved_settings.google_maps_base_url,
    )
    mapbox_client = HttpxMapboxClient.create(
        access_token=resolved_settings.mapbox_token,
        base_url=resolved_settings.mapbox_base_url,
    )

    async def close_resources() -> None:
        await google_maps_client.close()
        await mapbox_client.close()

    return ProxyContainer(
        settings=resolved_settings,
        google_maps_client=google_maps_client,
        mapbox_client=mapbox_client,
        food_bank_search=MockFoodBankSearch(random.Random()),
        directions_service=DirectionsService(
            maps_client=google_maps_client,
            timezone=resolved_settings.eta_timezone,
        ),
        close_resources=close_resources,
    )
