"""Guest access code generation."""

import secrets
import string

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits
ACCESS_CODE_LENGTH = 8


def generate_access_code(length: int = ACCESS_CODE_LENGTH) -> str:
    """Return a uniform random base-36 code, e.g. ``"K7Q2ZP0A"``."""
    if length < 1:
        raise ValueError("Access code length must be positive")
    return "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))
