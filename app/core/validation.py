"""Input validation rules shared by the backend and the profile client."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_strong_enough(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH
