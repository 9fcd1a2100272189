"""Authentication session access."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pantrypal.domain.preferences import UserPreferences
from pantrypal.domain.results import ApiResult
from pantrypal.services.preferences import PreferencesService

_logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    """Interface to the hosted auth provider."""

    def current_user_id(self) -> str | None:
        """Return the signed-in user's id, if there is a session."""

    def sign_in(self, email: str, password: str) -> str:
        """Sign in with a password and return the user id."""

    def sign_up(self, email: str, password: str) -> str:
        """Register a new account and return the user id."""

    def sign_out(self) -> None:
        """End the current session."""


@dataclass
class AuthService:
    """Signs users in and restores their onboarding state."""

    session_provider: SessionProvider
    preferences_service: PreferencesService
    preferences: UserPreferences

    @property
    def is_onboarded(self) -> bool:
        return self.preferences.onboarding_completed

    def restore_session(self) -> str | None:
        """Load preferences for an existing session, returning the user id."""
        user_id = self.session_provider.current_user_id()
        if user_id:
            self.preferences_service.hydrate(user_id, self.preferences)
        return user_id

    def sign_in(self, email: str, password: str) -> ApiResult[str]:
        try:
            user_id = self.session_provider.sign_in(email, password)
        except Exception as exc:
            _logger.warning("Sign in failed: %s", exc)
            return ApiResult.failure("unauthorized", str(exc) or "Sign in failed")
        self.preferences_service.hydrate(user_id, self.preferences)
        return ApiResult.success(user_id)

    def sign_up(self, email: str, password: str) -> ApiResult[str]:
        try:
            user_id = self.session_provider.sign_up(email, password)
        except Exception as exc:
            _logger.warning("Sign up failed: %s", exc)
            return ApiResult.failure("bad-data", str(exc) or "Sign up failed")
        self.preferences.reset_onboarding()
        return ApiResult.success(user_id)

    def sign_out(self) -> None:
        self.session_provider.sign_out()
        self.preferences.reset_onboarding()
