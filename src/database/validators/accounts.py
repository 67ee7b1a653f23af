import re

import email_validator
from email_validator import EmailNotValidError

PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*[0-9])(?=.*[@$!%*?&#]).*$")


def validate_password_strength(password: str) -> str:
    """Reject passwords too weak for a customer login.

    A password needs at least 8 characters, an upper and a lower case
    letter, a digit and one of ``@$!%*?&#``.

    Raises:
        ValueError: If a requirement is not met.
    """
    if len(password) < 8:
        raise ValueError("Password must contain at least 8 characters.")

    if not PASSWORD_PATTERN.match(password):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one digit, and one special character (@, $, !, %, *, ?, &, #)."
        )
    return password


def validate_email(user_email: str) -> str:
    """Normalize a customer email, which is also sent to Stripe.

    Deliverability is not checked, shops run without DNS access in tests.
    """
    try:
        return email_validator.validate_email(
            user_email, check_deliverability=False
        ).normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))
