"""
Password and credential field validation.

Configurable validation of the length and shape of credential fields.
bcrypt only uses the first 72 bytes of a password, which bounds the
default maximum.

Example:
    from common.utils import validate_password

    is_valid, errors = validate_password("short")
    if not is_valid:
        print("Password errors:", errors)
"""

from typing import List, Tuple


def validate_password(
    password: str,
    min_length: int = 10,
    max_length: int = 72,
) -> Tuple[bool, List[str]]:
    """
    Validate password length and whitespace.

    Args:
        password: The password to validate
        min_length: Minimum password length
        max_length: Maximum password length

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> validate_password("weak")
        (False, ['Must be at least 10 characters long'])

        >>> validate_password("long enough password")
        (True, [])
    """
    errors: List[str] = []

    if password != password.strip():
        errors.append("Cannot start or end with whitespace")

    if len(password) < min_length:
        errors.append(f"Must be at least {min_length} characters long")

    if len(password) > max_length:
        errors.append(f"Must be at most {max_length} characters long")

    return len(errors) == 0, errors
