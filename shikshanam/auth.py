"""Demo email authentication against fixed credential pairs."""

import hmac
from dataclasses import dataclass

from .models import User

AUTH_COOKIE = "auth_token"
REFRESH_COOKIE = "refresh_token"


@dataclass(frozen=True)
class MockUser:
    id: str
    email: str
    password: str
    name: str
    avatar: str | None = None
    provider: str = "email"

    def public(self) -> User:
        """The user as it may be sent to a client."""
        return User(
            id=self.id, email=self.email, name=self.name, avatar=self.avatar, provider=self.provider
        )


MOCK_USERS: tuple[MockUser, ...] = (
    MockUser(id="1", email="demo@shikshanam.com", password="demo123", name="Demo User"),  # noqa: S106
    MockUser(id="2", email="test@shikshanam.com", password="test123", name="Test User"),  # noqa: S106
)


def authenticate(email: str, password: str) -> User | None:
    """Return the matching demo user, or None."""
    for user in MOCK_USERS:
        if user.email == email and hmac.compare_digest(user.password.encode(), password.encode()):
            return user.public()
    return None
