"""Contact address (email) validation."""

import re

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def validate_email_format(email) -> bool:
    """Return True if `email` is a non-empty, address-shaped string."""
    if not email or not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None
