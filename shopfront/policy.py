"""Signup input rules, shared by the API and the client."""

import re

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8
MIN_SHOP_COUNT = 3
MAX_SHOP_NAME_LENGTH = 255

SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


def validate_username(username: str) -> list[str]:
    """Return the username rule violations."""
    if len(username.strip()) < MIN_USERNAME_LENGTH:
        return [f"Username must be at least {MIN_USERNAME_LENGTH} characters long"]
    return []


def validate_password(password: str) -> list[str]:
    """Return one message per password rule the password breaks."""
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not any(ch.isdigit() for ch in password):
        errors.append("Password must include at least one number")
    if not SPECIAL_CHARACTERS.search(password):
        errors.append("Password must include at least one special character")
    return errors


def validate_shop_names(shop_names: list[str]) -> list[str]:
    """Check shop names for blanks, padding, length, duplicates and the minimum count.

    Names are compared exactly (case-sensitive), matching how shops are looked
    up by subdomain.
    """
    errors = []
    if any(not name.strip() for name in shop_names):
        errors.append("Shop names must not be empty")
    if any(name.strip() and name != name.strip() for name in shop_names):
        errors.append("Shop names must not start or end with spaces")
    if any(len(name) > MAX_SHOP_NAME_LENGTH for name in shop_names):
        errors.append(f"Shop names must be at most {MAX_SHOP_NAME_LENGTH} characters long")

    names = [name for name in shop_names if name.strip()]
    unique_names = set(names)
    if len(unique_names) != len(names):
        errors.append("Shop names must be unique")
    if len(unique_names) < MIN_SHOP_COUNT:
        errors.append(f"At least {MIN_SHOP_COUNT} unique shop names are required")
    return errors


def validate_signup(username: str, password: str, shop_names: list[str]) -> list[str]:
    """Aggregate every signup rule violation into one list."""
    return (
        validate_username(username)
        + validate_password(password)
        + validate_shop_names(shop_names)
    )
