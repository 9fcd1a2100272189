"""Supabase Auth session provider."""

from dataclasses import dataclass

from supabase import Client

from pantrypal.services.auth import SessionProvider


@dataclass
class SupabaseSessionProvider(SessionProvider):
    """Session access backed by ``client.auth``."""

    client: Client

    def current_user_id(self) -> str | None:
        """Return the user id of the stored session, if any."""
        session = self.client.auth.get_session()
        if session is None or session.user is None:
            return None
        return str(session.user.id)

    def sign_in(self, email: str, password: str) -> str:
        """Sign in with email and password."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.user is None:
            raise RuntimeError("Sign in returned no user")
        return str(response.user.id)

    def sign_up(self, email: str, password: str) -> str:
        """Create an account with email and password."""
        response = self.client.auth.sign_up({"email": email, "password": password})
        if response.user is None:
            raise RuntimeError("Sign up returned no user")
        return str(response.user.id)

    def sign_out(self) -> None:
        self.client.auth.sign_out()
