"""Tests for demo email authentication."""

import pytest

from shikshanam.auth import MOCK_USERS, authenticate


class TestAuthenticate:
    @pytest.mark.parametrize(
        ("email", "password", "user_id", "name"),
        [
            ("demo@shikshanam.com", "demo123", "1", "Demo User"),
            ("test@shikshanam.com", "test123", "2", "Test User"),
        ],
    )
    def test_known_credentials(self, email: str, password: str, user_id: str, name: str) -> None:
        user = authenticate(email, password)

        assert user is not None
        assert user.id == user_id
        assert user.name == name
        assert user.email == email
        assert user.provider == "email"

    @pytest.mark.parametrize(
        ("email", "password"),
        [
            ("demo@shikshanam.com", "wrong"),
            ("demo@shikshanam.com", "test123"),
            ("nobody@shikshanam.com", "demo123"),
            ("demo@shikshanam.com", "पासवर्ड"),
        ],
    )
    def test_rejected_credentials(self, email: str, password: str) -> None:
        assert authenticate(email, password) is None

    def test_public_user_has_no_password(self) -> None:
        user = MOCK_USERS[0].public()

        dumped = user.model_dump(by_alias=True)

        assert "password" not in dumped
        assert dumped["email"] == "demo@shikshanam.com"
