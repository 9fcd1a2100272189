"""Tests for container wiring."""

import asyncio

from pantrypal.config import ClientSettings, ProxySettings, parse_allowed_origins
from pantrypal.containers import build_client_container, build_proxy_container
from pantrypal.services.onboarding import OnboardingStep


def test_build_client_container_creates_services(
    client_settings: ClientSettings,
) -> None:
    container = build_client_container(client_settings)

    assert container.food_categorizer is not None
    wizard = container.onboarding_wizard()
    assert wizard.draft is container.preferences
    assert wizard.step == OnboardingStep.GROUP_TYPE
    asyncio.run(container.close_resources())


def test_build_client_container_without_openai(
    client_settings: ClientSettings,
) -> None:
    settings = client_settings.model_copy(update={"openai_api_key": None})

    container = build_client_container(settings)

    assert container.food_categorizer is None
    asyncio.run(container.close_resources())


def test_build_proxy_container(proxy_settings: ProxySettings) -> None:
    container = build_proxy_container(proxy_settings)

    assert container.directions_service.timezone == "UTC"
    asyncio.run(container.close_resources())


def test_parse_allowed_origins() -> None:
    assert parse_allowed_origins("*") == ["*"]
    assert parse_allowed_origins(" https://a.test, https://b.test ,") == [
        "https://a.test",
        "https://b.test",
    ]
