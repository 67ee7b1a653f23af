import pytest
from pydantic import ValidationError

from database.validators.accounts import (
    validate_email,
    validate_password_strength
)
from schemas.accounts import UserLoginRequestSchema


@pytest.mark.validation
class TestLoginValidation:
    """Test login request validation."""

    def test_valid_login(self):
        login = UserLoginRequestSchema(
            email="Customer@Example.com",
            password="StrongPass123!"
        )
        assert login.email == "customer@example.com"

    def test_invalid_email_formats(self):
        """Test various invalid email formats."""
        invalid_emails = [
            "not-an-email",
            "@example.com",
            "user@",
            "",
        ]

        for email in invalid_emails:
            with pytest.raises(ValidationError):
                UserLoginRequestSchema(email=email, password="StrongPass123!")

    def test_password_required(self):
        with pytest.raises(ValidationError):
            UserLoginRequestSchema(email="customer@example.com")


@pytest.mark.validation
class TestUserFieldValidators:
    """Test the validators applied to user records."""

    def test_weak_passwords(self):
        weak_passwords = [
            "short",
            "nouppercase1!",
            "NOLOWERCASE1!",
            "NoDigit!",
            "NoSpecial1",
        ]

        for password in weak_passwords:
            with pytest.raises(ValueError):
                validate_password_strength(password)

    def test_strong_password(self):
        assert validate_password_strength("StrongPass123!") == "StrongPass123!"

    def test_email_is_normalized(self):
        assert validate_email("customer@EXAMPLE.com") == "customer@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            validate_email("customer@")
