"""Tests for sign in and session restore."""

from pantrypal.domain.preferences import UserPreferences
from pantrypal.services.auth import AuthService
from pantrypal.services.preferences import PreferencesService
from tests.conftest import FakeSessionProvider, InMemoryPreferencesRepository


def _service(
    provider: FakeSessionProvider, repository: InMemoryPreferencesRepository
) -> AuthService:
    return AuthService(provider, PreferencesService(repository), UserPreferences())


def test_sign_in_hydrates_onboarding_state() -> None:
    repository = InMemoryPreferencesRepository()
    provider = FakeSessionProvider(
        user_id=None, accounts={"ada@example.com": ("secret", "user-7")}
    )
    draft = UserPreferences()
    draft.update_name("Ada", "Lovelace")
    draft.set_location("Stanford, CA, USA")
    repository.records["user-7"] = draft.to_record("user-7", completed=True)
    service = _service(provider, repository)

    result = service.sign_in("ada@example.com", "secret")

    assert result.ok and result.data == "user-7"
    assert service.is_onboarded
    assert service.preferences.location == "Stanford, CA, USA"


def test_sign_in_failure_is_unauthorized() -> None:
    service = _service(
        FakeSessionProvider(user_id=None), InMemoryPreferencesRepository()
    )

    result = service.sign_in("nobody@example.com", "wrong")

    assert result.kind == "unauthorized"
    assert not service.is_onboarded


def test_sign_up_and_sign_out_reset_onboarding() -> None:
    provider = FakeSessionProvider(user_id=None)
    service = _service(provider, InMemoryPreferencesRepository())
    service.preferences.complete_onboarding()

    assert service.sign_up("new@example.com", "secret").ok
    assert not service.is_onboarded

    service.preferences.complete_onboarding()
    service.sign_out()
    assert provider.signed_out
    assert not service.is_onboarded


def test_restore_session_without_user() -> None:
    service = _service(
        FakeSessionProvider(user_id=None), InMemoryPreferencesRepository()
    )

    assert service.restore_session() is None
